from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Sequence, Union

from .normalize import normalize_row
from .rules import OUTPUT_LINE_TERMINATOR, TARGET_ENCODING, Delimiter

logger = logging.getLogger(__name__)


def serialize_rows(rows: Iterable[Sequence[str]], delimiter: Delimiter) -> str:
    """Normalize every field and serialize the rows with `delimiter`."""
    outp = io.StringIO(newline="")
    writer = csv.writer(outp, delimiter=delimiter.char, lineterminator=OUTPUT_LINE_TERMINATOR)
    for row in rows:
        writer.writerow(normalize_row(row))
    return outp.getvalue()


def write_output_csv(output_path: Union[str, Path], rows: Iterable[Sequence[str]], delimiter: Delimiter) -> None:
    """
    Write cleaned rows to `output_path`.

    The whole file is serialized before the path is opened. OSError from
    opening or writing propagates to the caller.
    """
    text = serialize_rows(rows, delimiter)
    with open(output_path, "w", newline="", encoding=TARGET_ENCODING) as f:
        f.write(text)
    logger.info("Wrote %s bytes to %s", len(text), output_path)
