"""Data models for .properties file entries."""

from dataclasses import dataclass, replace
from typing import Union


@dataclass
class BasicEntry:
    """A blank line or comment line of a .properties file.

    Attributes:
        content: The whole logical line exactly as read, including its
            line ending. It is never unescaped.
    """
    content: str

    def to_text(self) -> str:
        """Return the line exactly as it was read."""
        return self.content

    def copy(self) -> "BasicEntry":
        """Create an equal, independent entry."""
        return replace(self)


@dataclass
class PropertyEntry:
    """A key/value line of a .properties file.

    All fields hold the *escaped* text exactly as it appears in the file, so
    that writing the entry reproduces the original line. Use
    ``propfile.escaping.unescape`` to get the logical key or value.

    Attributes:
        key: The escaped key.
        value: The escaped value.
        leading_whitespace: Whitespace before the key.
        separator: Whitespace and the optional ``=`` or ``:`` between key
            and value.
        line_ending: The line terminator (``\\n``, ``\\r`` or ``\\r\\n``).
    """
    key: str
    value: str
    leading_whitespace: str = ""
    separator: str = " = "
    line_ending: str = "\n"

    def to_text(self) -> str:
        """Convert entry to .properties file format.

        Returns:
            The entry as a single (possibly continued) logical line.
        """
        return (
            self.leading_whitespace
            + self.key
            + self.separator
            + self.value
            + self.line_ending
        )

    def copy(self) -> "PropertyEntry":
        """Create an equal, independent entry."""
        return replace(self)


Entry = Union[BasicEntry, PropertyEntry]


def check_entry(entry: object) -> Entry:
    """Make sure the given object is one of the two entry types.

    Raises:
        TypeError: If it is neither a BasicEntry nor a PropertyEntry.
    """
    if not isinstance(entry, (BasicEntry, PropertyEntry)):
        raise TypeError(f"Unknown entry type: {type(entry).__name__}")
    return entry
