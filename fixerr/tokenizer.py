from __future__ import annotations

import csv
import logging
from typing import Iterable, Iterator, List

from .errors import FormatError
from .rules import Delimiter

logger = logging.getLogger(__name__)


def iter_physical_rows(lines: Iterable[str], delimiter: Delimiter) -> Iterator[List[str]]:
    """
    Tokenize text lines into physical rows.

    - Quoted values may span lines; the tokenizer hands them over as one field.
    - Blank lines yield no row.
    - Malformed quoting or undecodable bytes raise FormatError, which aborts the run.
    """
    reader = csv.reader(lines, delimiter=delimiter.char, strict=True)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.error("Tokenizer failed near line %s: %s", reader.line_num, e)
            raise FormatError(f"line {reader.line_num}: {e}") from e
        except UnicodeDecodeError as e:
            raise FormatError(f"line {reader.line_num}: input is not valid text: {e}") from e
        if not row:
            continue
        yield row
