"""Escaping and unescaping of .properties keys and values."""

from .codec import (
    comment_out,
    escape_key,
    escape_unicode,
    escape_unicode_char,
    escape_value,
    unescape,
    unescape_unicode_only,
)

__all__ = [
    "comment_out",
    "escape_key",
    "escape_unicode",
    "escape_unicode_char",
    "escape_value",
    "unescape",
    "unescape_unicode_only",
]
