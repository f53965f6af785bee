"""
Record reconstruction.

Physical rows come in from the tokenizer; logical rows of exactly
`expected_columns` fields go out. A record that was split by raw line
breaks is stitched back together in a single buffer:

- the buffer's trailing field is joined to the next row's leading field
  with a newline (only when the trailing field is non-empty)
- the rest of that row's fields are appended as new entries
- once the buffer reaches the expected width it is emitted as a fixed row

Rows wider than the expected width are dropped on sight. Whitespace cleanup
is not done here; see normalize.normalize_field.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple, Union

from .detect import detect_column_count
from .models import LogicalRow
from .normalize import decode_input
from .rules import STITCH_SEPARATOR, Delimiter, HeaderMode
from .tokenizer import iter_physical_rows

logger = logging.getLogger(__name__)


@dataclass
class Stats:
    total_rows: int = 0
    fixed_rows: int = 0
    removed_rows: int = 0

    @property
    def success_rate(self) -> float:
        if self.total_rows == 0:
            return 0.0
        return (self.total_rows - self.removed_rows) / self.total_rows * 100.0


class RecordReconstructor:
    """Single-buffer state machine: Idle while the buffer is empty, Accumulating otherwise."""

    def __init__(self, expected_columns: int, stats: Optional[Stats] = None) -> None:
        if expected_columns <= 0:
            raise ValueError("expected_columns must be positive")
        self.expected_columns = expected_columns
        self.stats = stats if stats is not None else Stats()
        self._buffer: List[str] = []

    @property
    def is_accumulating(self) -> bool:
        return bool(self._buffer)

    @property
    def buffer(self) -> Tuple[str, ...]:
        return tuple(self._buffer)

    def feed(self, row: List[str]) -> Optional[LogicalRow]:
        """Consume one physical row; return a logical row if one completed."""
        self.stats.total_rows += 1
        line_no = self.stats.total_rows
        n = len(row)

        # Over-length rows cannot be a fragment or a full record. A buffer in
        # progress is left exactly as it is.
        if n > self.expected_columns:
            self.stats.removed_rows += 1
            logger.debug("Row %s discarded: %s fields, expected %s", line_no, n, self.expected_columns)
            return None

        if not self._buffer:
            if n == self.expected_columns:
                return tuple(row)
            self._buffer = list(row)
            return None

        if n:
            if self._buffer[-1]:
                self._buffer[-1] += STITCH_SEPARATOR
            self._buffer[-1] += row[0]
            self._buffer.extend(row[1:])

        if len(self._buffer) == self.expected_columns:
            out = tuple(self._buffer)
            self._buffer = []
            self.stats.fixed_rows += 1
            logger.debug("Row %s completes a merged record", line_no)
            return out

        if len(self._buffer) > self.expected_columns:
            logger.debug(
                "Row %s overflows merged record (%s fields), discarding it",
                line_no,
                len(self._buffer),
            )
            self._buffer = []
            self.stats.removed_rows += 1

        return None

    def finish(self) -> None:
        """End of stream: an unfinished buffer counts as one removed row."""
        if self._buffer:
            logger.debug("Input ended mid-record; discarding %s buffered fields", len(self._buffer))
            self.stats.removed_rows += 1
            self._buffer = []

    def reconstruct(self, rows: Iterable[List[str]]) -> Iterator[LogicalRow]:
        for row in rows:
            out = self.feed(row)
            if out is not None:
                yield out
        self.finish()


def reconstruct_records(
    source: Union[str, Path, TextIO],
    header_mode: HeaderMode,
    delimiter: Delimiter,
    stats: Stats,
    expected_columns: Union[int, str, None] = None,
) -> List[LogicalRow]:
    """
    Read `source` and return its logical rows, header first when present.

    `source` is a path or an open text stream. A path is read as bytes and
    decoded the same way as an upload, so any encoding and a UTF-8 BOM are
    handled. The whole file is processed before anything is returned, so a
    FormatError or OSError leaves the caller with nothing half-done.
    """
    if isinstance(source, (str, Path)):
        text, enc_report = decode_input(Path(source).read_bytes())
        logger.debug("Decoded %s as %s", source, enc_report["decode_used"])
        return reconstruct_text(text, header_mode, delimiter, stats, expected_columns)
    return _reconstruct_stream(source, header_mode, delimiter, stats, expected_columns)


def reconstruct_text(
    text: str,
    header_mode: HeaderMode,
    delimiter: Delimiter,
    stats: Stats,
    expected_columns: Union[int, str, None] = None,
) -> List[LogicalRow]:
    return _reconstruct_stream(io.StringIO(text, newline=""), header_mode, delimiter, stats, expected_columns)


def _reconstruct_stream(
    stream: TextIO,
    header_mode: HeaderMode,
    delimiter: Delimiter,
    stats: Stats,
    expected_columns: Union[int, str, None],
) -> List[LogicalRow]:
    rows = iter_physical_rows(stream, delimiter)
    width, header = detect_column_count(rows, header_mode, expected_columns)

    logical_rows: List[LogicalRow] = []
    if header is not None:
        logical_rows.append(header)

    logical_rows.extend(RecordReconstructor(width, stats).reconstruct(rows))

    logger.info(
        "Reconstructed %s records from %s rows (fixed=%s, removed=%s)",
        len(logical_rows),
        stats.total_rows,
        stats.fixed_rows,
        stats.removed_rows,
    )
    return logical_rows
