"""Options for reading, writing and reformatting .properties files."""

import codecs
from dataclasses import dataclass, replace
from enum import Enum

DEFAULT_CHARSET = "utf-8"
DEFAULT_FORMAT = "<key> = <value>\\n"

# Canonical codec names that can represent every unicode character
UNICODE_CHARSETS = frozenset({
    "utf-8",
    "utf-16",
    "utf-16-le",
    "utf-16-be",
    "utf-32",
    "utf-32-le",
    "utf-32-be",
})


class UnicodeHandling(Enum):
    """How unicode characters are written.

    Only relevant for unicode-capable charsets. With any other charset,
    characters above 0x7f are always written as ``\\uXXXX`` escapes.
    """
    DO_NOTHING = "do_nothing"
    ESCAPE = "escape"
    UNICODE = "unicode"
    BY_CHARSET = "by_charset"


class MissingKeyAction(Enum):
    """What to do with keys that exist in an updated file but not in the document."""
    NOTHING = "nothing"
    DELETE = "delete"
    COMMENT = "comment"


class AttachCommentsTo(Enum):
    """Which key/value pair comments and blank lines belong to when reordering.

    NEXT attaches them to the following pair, PREV to the preceding pair.
    ORIGINAL_POSITION keeps them at their line position while pairs move.
    """
    NEXT = "next"
    PREV = "prev"
    ORIGINAL_POSITION = "original"


def is_unicode_charset(charset: str) -> bool:
    """Check whether a charset can encode every unicode character.

    Args:
        charset: Any codec name known to Python (e.g. "UTF8", "latin-1").

    Returns:
        True for the UTF-8, UTF-16 and UTF-32 families.
    """
    return codecs.lookup(charset).name in UNICODE_CHARSETS


@dataclass(frozen=True)
class WriteOptions:
    """Options used when writing a document.

    Attributes:
        charset: Encoding of the written file (default: "utf-8").
        missing_key_action: Only used when updating an existing file.
        unicode_handling: How to write non-ASCII characters.
    """
    charset: str = DEFAULT_CHARSET
    missing_key_action: MissingKeyAction = MissingKeyAction.NOTHING
    unicode_handling: UnicodeHandling = UnicodeHandling.DO_NOTHING

    def with_charset(self, charset: str) -> "WriteOptions":
        return replace(self, charset=charset)

    def with_missing_key_action(self, missing_key_action: MissingKeyAction) -> "WriteOptions":
        return replace(self, missing_key_action=missing_key_action)

    def with_unicode_handling(self, unicode_handling: UnicodeHandling) -> "WriteOptions":
        return replace(self, unicode_handling=unicode_handling)


@dataclass(frozen=True)
class ReformatOptions:
    """Options used when reformatting or reordering a document.

    Attributes:
        charset: Encoding used for the file based operations.
        unicode_handling: How to write non-ASCII characters back.
        format: Layout of key/value lines, e.g. ``<key> = <value>\\n``. The
            escape sequences \\t, \\f, \\r and \\n are given literally.
        reformat_key_and_value: Also normalize the escaping of keys and
            values, collapsing continued lines into a single line.
        attach_comments_to: Which property comments and blank lines move
            with when reordering.
    """
    charset: str = DEFAULT_CHARSET
    unicode_handling: UnicodeHandling = UnicodeHandling.DO_NOTHING
    format: str = DEFAULT_FORMAT
    reformat_key_and_value: bool = False
    attach_comments_to: AttachCommentsTo = AttachCommentsTo.NEXT

    def with_charset(self, charset: str) -> "ReformatOptions":
        return replace(self, charset=charset)

    def with_unicode_handling(self, unicode_handling: UnicodeHandling) -> "ReformatOptions":
        return replace(self, unicode_handling=unicode_handling)

    def with_format(self, format: str) -> "ReformatOptions":
        return replace(self, format=format)

    def with_reformat_key_and_value(self, reformat_key_and_value: bool) -> "ReformatOptions":
        return replace(self, reformat_key_and_value=reformat_key_and_value)

    def with_attach_comments_to(self, attach_comments_to: AttachCommentsTo) -> "ReformatOptions":
        return replace(self, attach_comments_to=attach_comments_to)

    def to_write_options(self) -> WriteOptions:
        """Get the write options matching these reformat options."""
        return WriteOptions(
            charset=self.charset,
            unicode_handling=self.unicode_handling,
        )
