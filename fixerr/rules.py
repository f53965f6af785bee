"""
Deterministic repair rules.

Delimiter and header mode are closed value sets; everything else here is a
default the CLI and the service fall back to.
"""

from __future__ import annotations

from enum import Enum

from .errors import ConfigError


TARGET_ENCODING = "utf-8"
OUTPUT_LINE_TERMINATOR = "\n"
STITCH_SEPARATOR = "\n"

DEFAULT_INPUT_FILE = "data.csv"
DEFAULT_OUTPUT_FILE = "output.csv"


class Delimiter(Enum):
    COMMA = ","
    SEMICOLON = ";"
    TAB = "\t"
    PIPE = "|"

    @property
    def char(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Delimiter":
        """Accept a member name ("semicolon") or the literal character (";")."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().upper()
        if key in cls.__members__:
            return cls[key]
        for member in cls:
            if value == member.value or (value == "\\t" and member is cls.TAB):
                return member
        raise ConfigError(f"Unknown delimiter: {value!r}")


class HeaderMode(Enum):
    HAS_HEADERS = "has_headers"
    NO_HEADERS = "no_headers"

    def as_bool(self) -> bool:
        return self is HeaderMode.HAS_HEADERS

    @classmethod
    def from_bool(cls, has_headers: bool) -> "HeaderMode":
        return cls.HAS_HEADERS if has_headers else cls.NO_HEADERS


DEFAULT_DELIMITER = Delimiter.COMMA
DEFAULT_HEADER_MODE = HeaderMode.HAS_HEADERS
