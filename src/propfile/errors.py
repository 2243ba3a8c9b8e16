"""Exceptions and diagnostic records for .properties handling."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


class PropertiesError(Exception):
    """Base class for all errors raised by propfile."""


class InvalidFormatError(PropertiesError, ValueError):
    """Raised when a reformat format string does not match the layout grammar.

    Attributes:
        format: The offending format string.
    """

    def __init__(self, format: str):
        self.format = format
        super().__init__(
            "The format string is in an invalid format.\n"
            "A usual format is \"<key> = <value>\\n\".\n"
            f"The given format was: {format!r}"
        )


class PropertiesIOError(PropertiesError, OSError):
    """Raised when reading or writing a .properties source fails.

    The underlying exception is always chained as ``__cause__``.

    Attributes:
        path: The file that was accessed, or None for streams.
    """

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = path
        super().__init__(message)


@dataclass
class InvalidUnicodeEscape:
    """A ``\\uXXXX`` escape that could not be decoded.

    These are never raised. The escape is left in the text unchanged and one
    of these records is reported instead.

    Attributes:
        sequence: The escape text as found (possibly truncated).
        position: Offset of the backslash in the escaped input.
    """
    sequence: str
    position: int

    @property
    def message(self) -> str:
        return (
            f"Found invalid unicode escape sequence {self.sequence!r}. "
            "No conversion will be done."
        )
