"""Escaping and unescaping of keys and values in .properties files.

Keys and values are stored in their *escaped* form, exactly as they appear
in the file. The functions here convert between that form and the logical
(unescaped) strings callers work with.

Escaping for keys and escaping for values differ, and unicode escaping is a
separate step applied by the writer depending on the target charset.
"""

import logging
from typing import Optional

from ..errors import InvalidUnicodeEscape

logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

WHITESPACE = " \t\f"
LINE_BREAKS = "\r\n"

# Characters that need a leading backslash inside a key
KEY_SPECIAL_CHARS = frozenset(" \t\f=:\n\r#!\\")

Diagnostics = Optional[list[InvalidUnicodeEscape]]


def _is_surrogate(codepoint: int) -> bool:
    return 0xD800 <= codepoint <= 0xDFFF


def _parse_hex4(s: str, start: int) -> Optional[int]:
    digits = s[start:start + 4]
    if len(digits) != 4 or not all(c in HEX_DIGITS for c in digits):
        return None
    return int(digits, 16)


def _read_unicode_escape(s: str, i: int) -> tuple[Optional[str], int]:
    """Decode the ``\\uXXXX`` escape starting at ``s[i]``.

    A high surrogate directly followed by an escaped low surrogate is
    combined into a single character.

    Returns:
        Tuple of (decoded character, number of consumed characters), or
        (None, 0) if the escape is invalid.
    """
    codepoint = _parse_hex4(s, i + 2)
    if codepoint is None:
        return None, 0

    if 0xD800 <= codepoint <= 0xDBFF and s[i + 6:i + 8] == "\\u":
        low = _parse_hex4(s, i + 8)
        if low is not None and 0xDC00 <= low <= 0xDFFF:
            combined = 0x10000 + ((codepoint - 0xD800) << 10) + (low - 0xDC00)
            return chr(combined), 12

    return chr(codepoint), 6


def _report_invalid_escape(s: str, i: int, diagnostics: Diagnostics) -> None:
    invalid = InvalidUnicodeEscape(sequence=s[i:i + 6], position=i)
    logger.warning("%s", invalid.message)
    if diagnostics is not None:
        diagnostics.append(invalid)


def unescape(s: str, diagnostics: Diagnostics = None) -> str:
    """Resolve all escaping of a key or value.

    - ``\\uXXXX`` escapes are replaced by the actual character
    - ``\\\\`` is reduced to a single backslash
    - literal ``\\n`` and ``\\r`` become real line breaks
    - a backslash before any other character is dropped
    - a backslash as the very last character is dropped
    - real line breaks (continued lines) are removed along with the
      whitespace at the start of the following line

    Invalid unicode escapes are left as they are. They are logged and, if
    given, appended to ``diagnostics``.

    Args:
        s: The escaped key or value.
        diagnostics: Optional list collecting invalid unicode escapes.

    Returns:
        The logical string.
    """
    result = []
    at_line_start = False
    i = 0
    n = len(s)

    while i < n:
        c = s[i]

        if c == "\\":
            if i == n - 1:
                break

            next_char = s[i + 1]
            if next_char == "u":
                decoded, length = _read_unicode_escape(s, i)
                if decoded is None:
                    _report_invalid_escape(s, i, diagnostics)
                    result.append("\\u")
                    i += 2
                else:
                    result.append(decoded)
                    i += length
            elif next_char in LINE_BREAKS:
                # escaped line break, handled as a continuation below
                i += 1
                continue
            elif next_char == "n":
                result.append("\n")
                i += 2
            elif next_char == "r":
                result.append("\r")
                i += 2
            else:
                result.append(next_char)
                i += 2
            at_line_start = False
            continue

        if c in LINE_BREAKS:
            if c == "\r" and i + 1 < n and s[i + 1] == "\n":
                i += 1
            i += 1
            at_line_start = True
            continue

        if at_line_start and c in WHITESPACE:
            i += 1
            continue

        at_line_start = False
        result.append(c)
        i += 1

    return "".join(result)


def unescape_unicode_only(
    s: str,
    diagnostics: Diagnostics = None,
    min_codepoint: int = 0
) -> str:
    """Resolve ``\\uXXXX`` escapes and leave every other escape untouched.

    Args:
        s: The escaped text.
        diagnostics: Optional list collecting invalid unicode escapes.
        min_codepoint: Escapes for characters below this code point stay
            escaped. Lone surrogates always stay escaped.

    Returns:
        The text with unicode escapes replaced by real characters.
    """
    result = []
    i = 0
    n = len(s)

    while i < n:
        c = s[i]
        if c != "\\" or i + 1 >= n:
            result.append(c)
            i += 1
            continue

        next_char = s[i + 1]
        if next_char == "\\":
            result.append("\\\\")
            i += 2
        elif next_char == "u":
            decoded, length = _read_unicode_escape(s, i)
            if decoded is None:
                _report_invalid_escape(s, i, diagnostics)
                result.append("\\u")
                i += 2
                continue

            codepoint = ord(decoded)
            if codepoint < min_codepoint or _is_surrogate(codepoint):
                result.append(s[i:i + length])
            else:
                result.append(decoded)
            i += length
        else:
            result.append(c)
            i += 1

    return "".join(result)


def escape_key(s: str) -> str:
    """Escape a logical key for use in a .properties file.

    Whitespace, separators, line breaks, comment characters and backslashes
    get a leading backslash. A CRLF pair is escaped as one unit.
    Unicode characters are not touched here; that is up to the writer.
    """
    result = []
    i = 0
    n = len(s)

    while i < n:
        c = s[i]
        if c in KEY_SPECIAL_CHARS:
            result.append("\\")
        result.append(c)

        if c == "\r" and i + 1 < n and s[i + 1] == "\n":
            result.append("\n")
            i += 1
        i += 1

    return "".join(result)


def escape_value(s: str) -> str:
    """Escape a logical value for use in a .properties file.

    Line breaks become literal ``\\n``/``\\r`` and backslashes are doubled.
    Nothing else needs escaping in a value.
    """
    result = []
    for c in s:
        if c == "\n":
            result.append("\\n")
        elif c == "\r":
            result.append("\\r")
        elif c == "\\":
            result.append("\\\\")
        else:
            result.append(c)
    return "".join(result)


def escape_unicode_char(c: str) -> str:
    """Escape a single character as ``\\uxxxx``, regardless of its value.

    Characters outside the BMP are written as a surrogate pair.
    """
    codepoint = ord(c)
    if codepoint > 0xFFFF:
        codepoint -= 0x10000
        high = 0xD800 + (codepoint >> 10)
        low = 0xDC00 + (codepoint & 0x3FF)
        return f"\\u{high:04x}\\u{low:04x}"
    return f"\\u{codepoint:04x}"


def escape_unicode(s: str) -> str:
    """Escape all characters above 0x7f as ``\\uxxxx`` sequences."""
    return "".join(c if ord(c) <= 0x7F else escape_unicode_char(c) for c in s)


def comment_out(text: str) -> str:
    """Turn text into comment lines.

    A ``#`` is put in front of the text and after every line break that is
    followed by more characters. Used for commenting out whole (possibly
    multi-line) key/value entries.
    """
    result = ["#"]
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        result.append(c)

        if c in LINE_BREAKS:
            if c == "\r" and i + 1 < n and text[i + 1] == "\n":
                result.append("\n")
                i += 1
            if i + 1 < n:
                result.append("#")
        i += 1

    return "".join(result)
