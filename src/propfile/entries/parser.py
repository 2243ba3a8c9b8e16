"""Parser for Java .properties files.

Parsing happens in two steps. ``LogicalLineReader`` splits the text into
logical lines, joining physical lines that end in an escaped line break.
``EntryParser`` then turns each logical line into an entry, keeping every
character so that the entry can be written back unchanged.
"""

import logging
from collections.abc import Iterator
from typing import Optional

from .models import BasicEntry, Entry, PropertyEntry

logger = logging.getLogger(__name__)

WHITESPACE = " \t\f"
LINE_BREAKS = "\r\n"
SEPARATORS = "=:"
COMMENT_CHARS = "#!"

# Characters that end an unescaped key
KEY_TERMINATORS = WHITESPACE + SEPARATORS + LINE_BREAKS


def _skip(line: str, i: int, chars: str) -> int:
    while i < len(line) and line[i] in chars:
        i += 1
    return i


def _line_break_length(text: str, i: int) -> int:
    """Length of the line break at ``text[i]`` (2 for CRLF, else 1)."""
    if text[i] == "\r" and i + 1 < len(text) and text[i + 1] == "\n":
        return 2
    return 1


def is_blank_or_comment(line: str) -> bool:
    """Check whether a logical line is a blank line or a comment line.

    A comment line starts with ``#`` or ``!`` after optional whitespace.
    A blank line holds nothing but whitespace. A single backslash right
    before the line break (or the end of the line) does not count.
    """
    i = _skip(line, 0, WHITESPACE)
    if i >= len(line) or line[i] in LINE_BREAKS or line[i] in COMMENT_CHARS:
        return True
    if line[i] == "\\":
        return i + 1 >= len(line) or line[i + 1] in LINE_BREAKS
    return False


class LogicalLineReader:
    """Splits .properties text into logical lines.

    A logical line ends at a line break (``\\n``, ``\\r`` or ``\\r\\n``)
    unless that break is escaped by an odd number of backslashes. Comment
    lines and blank lines always end at the first line break.

    The returned lines include their line breaks, so joining all of them
    gives back the original text.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read_logical_line()
            if line is None:
                return
            yield line

    def read_logical_line(self) -> Optional[str]:
        """Read the next logical line.

        Returns:
            The logical line including its line break(s), or None at the end
            of the text.
        """
        text = self._text
        n = len(text)
        if self._pos >= n:
            return None

        start = i = self._pos
        is_blank = True
        is_comment = False
        backslashes = 0

        while i < n:
            c = text[i]

            if c in LINE_BREAKS:
                escaped = backslashes % 2 == 1 and not is_blank and not is_comment
                i += _line_break_length(text, i)
                if not escaped:
                    break
                backslashes = 0
                continue

            if is_blank:
                if c == "\\":
                    if i + 1 < n and text[i + 1] not in LINE_BREAKS:
                        is_blank = False
                elif c not in WHITESPACE:
                    is_blank = False
                    is_comment = c in COMMENT_CHARS

            backslashes = backslashes + 1 if c == "\\" else 0
            i += 1

        self._pos = i
        return text[start:i]


class EntryParser:
    """Parser for logical .properties lines.

    Never fails: every logical line is either a blank/comment line or a
    key/value line, even without a separator or with an empty key.
    """

    def parse(self, line: str) -> Entry:
        """Parse a single logical line into an entry.

        Args:
            line: A logical line as returned by ``LogicalLineReader``.

        Returns:
            A BasicEntry for blank and comment lines, a PropertyEntry
            otherwise.
        """
        if is_blank_or_comment(line):
            return BasicEntry(line)

        # Everything after the last non line break character is the line
        # ending, also if it follows an escaping backslash.
        n = len(line)
        while n > 0 and line[n - 1] in LINE_BREAKS:
            n -= 1
        line_ending = line[n:] or "\n"

        # Leading whitespace. If a separator shows up before the key, the
        # key is empty and the whitespace goes to the separator.
        i = _skip(line, 0, WHITESPACE)
        if i < n and line[i] in SEPARATORS:
            i = 0
        leading_whitespace = line[:i]

        key_start = i
        continuation_ws: Optional[int] = None
        while i < n:
            c = line[i]
            if c == "\\":
                if i + 1 < n and line[i + 1] in LINE_BREAKS:
                    i += 1 + _line_break_length(line, i + 1)
                    continuation_ws = i
                    i = _skip(line, i, WHITESPACE)
                    continue
                i += 2
            elif c in KEY_TERMINATORS:
                break
            else:
                i += 1
            continuation_ws = None
        i = min(i, n)

        # Whitespace skipped after a continued key belongs to the separator
        key_end = continuation_ws if continuation_ws is not None else i
        key = line[key_start:key_end]

        i = _skip(line, i, WHITESPACE)
        if i < n and line[i] in SEPARATORS:
            i += 1
        i = _skip(line, i, WHITESPACE)
        separator = line[key_end:i]
        value = line[i:n]

        return PropertyEntry(
            key=key,
            value=value,
            leading_whitespace=leading_whitespace,
            separator=separator,
            line_ending=line_ending,
        )

    def parse_text(self, text: str) -> list[Entry]:
        """Parse the whole content of a .properties file.

        Args:
            text: The decoded file content.

        Returns:
            List of entries in file order.
        """
        entries = [self.parse(line) for line in LogicalLineReader(text)]
        logger.debug("Parsed %d entries", len(entries))
        return entries
