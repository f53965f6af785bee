"""
Fatal errors raised by a repair run.

Row discards are not errors; they are counted in Stats.removed_rows.
I/O failures are left as the builtin OSError and surface unchanged.
"""


class FixerrError(RuntimeError):
    pass


class ConfigError(FixerrError):
    """Invalid run configuration (column count, delimiter, header mode)."""


class FormatError(FixerrError):
    """The input could not be tokenized, or has no readable header row."""
