from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, Union

from .errors import ConfigError, FormatError
from .models import LogicalRow
from .rules import HeaderMode

logger = logging.getLogger(__name__)


def resolve_column_count(value: Union[int, str, None]) -> int:
    """Turn an externally supplied column count into a positive int or raise ConfigError."""
    if value is None or isinstance(value, bool):
        raise ConfigError("expected column count is required when the file has no headers")

    if isinstance(value, int):
        count = value
    else:
        text = str(value).strip()
        if not text:
            raise ConfigError("expected column count is required when the file has no headers")
        try:
            count = int(text)
        except ValueError:
            raise ConfigError(f"expected column count must be a number, got {text!r}") from None

    if count <= 0:
        raise ConfigError(f"expected column count must be positive, got {count}")
    return count


def detect_column_count(
    rows: Iterator[List[str]],
    header_mode: HeaderMode,
    expected_columns: Union[int, str, None] = None,
) -> Tuple[int, Optional[LogicalRow]]:
    """
    Resolve the field width for the file.

    With headers the first physical row is consumed from `rows` and returned
    so it can be emitted ahead of the data. Without headers nothing is read
    and `expected_columns` must already be resolved by the caller.
    """
    if header_mode is HeaderMode.NO_HEADERS:
        count = resolve_column_count(expected_columns)
        logger.debug("Using supplied column count: %s", count)
        return count, None

    header = next(rows, None)
    if not header:
        raise FormatError("cannot read header row: input is empty")

    logger.debug("Detected %s columns from header", len(header))
    return len(header), tuple(header)
