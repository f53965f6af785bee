import pytest

from fixerr.detect import detect_column_count, resolve_column_count
from fixerr.errors import ConfigError, FormatError
from fixerr.rules import HeaderMode


def test_header_sets_width_and_is_returned():
    rows = iter([["ID", "Name", "Amount"], ["1", "x", "2"]])
    width, header = detect_column_count(rows, HeaderMode.HAS_HEADERS)
    assert width == 3
    assert header == ("ID", "Name", "Amount")
    # header consumed, data left in place
    assert next(rows) == ["1", "x", "2"]


def test_missing_header_is_format_error():
    with pytest.raises(FormatError):
        detect_column_count(iter([]), HeaderMode.HAS_HEADERS)


def test_no_headers_reads_nothing():
    rows = iter([["1", "x"]])
    width, header = detect_column_count(rows, HeaderMode.NO_HEADERS, "2")
    assert (width, header) == (2, None)
    assert next(rows) == ["1", "x"]


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "0", "-3", 0, True, "2.5"])
def test_bad_column_counts(value):
    with pytest.raises(ConfigError):
        resolve_column_count(value)


def test_column_count_accepts_padded_input():
    assert resolve_column_count(" 7\n") == 7
    assert resolve_column_count(4) == 4
