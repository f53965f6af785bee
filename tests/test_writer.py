import pytest

from fixerr.rules import Delimiter
from fixerr.writer import serialize_rows, write_output_csv


def test_serialize_normalizes_every_field():
    rows = [("ID", " Details "), ("1", "Mineral water from\nBodorna")]
    assert serialize_rows(rows, Delimiter.COMMA) == "ID,Details\n1,Mineral water from Bodorna\n"


def test_serialize_quotes_delimiter_inside_field():
    rows = [("1", "Mestia,\nGeorgia")]
    assert serialize_rows(rows, Delimiter.COMMA) == '1,"Mestia, Georgia"\n'


def test_serialize_uses_configured_delimiter():
    assert serialize_rows([("a", "b")], Delimiter.TAB) == "a\tb\n"
    assert serialize_rows([("a", "b")], Delimiter.PIPE) == "a|b\n"


def test_write_output_csv(tmp_path):
    out = tmp_path / "out.csv"
    write_output_csv(str(out), [("a", "b c"), ("1", "2")], Delimiter.SEMICOLON)
    assert out.read_text(encoding="utf-8") == "a;b c\n1;2\n"


def test_write_to_missing_directory_fails(tmp_path):
    with pytest.raises(OSError):
        write_output_csv(str(tmp_path / "missing" / "out.csv"), [("a",)], Delimiter.COMMA)
