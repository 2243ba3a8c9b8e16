"""Reformatting and reordering of .properties documents."""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..config import ReformatOptions
from ..entries import BasicEntry, Entry, PropertyEntry, check_entry
from ..errors import InvalidFormatError
from ..escaping import escape_key, escape_value, unescape
from ..files import read_entries, write_entries
from .grouping import flatten, group_entries, sort_groups

logger = logging.getLogger(__name__)

# Whitespace in a format string: a space or the literal escapes \t and \f
_WS = r"(?: |\\t|\\f)"

# Pattern of a format string like "<key> = <value>\n"
FORMAT_PATTERN = re.compile(
    rf"(?P<leading_whitespace>{_WS}*)"
    r"<key>"
    rf"(?P<separator>{_WS}*(?:{_WS}|=|:){_WS}*)"
    r"<value>"
    r"(?P<line_ending>\\r\\n|\\n|\\r)",
    re.IGNORECASE
)

_FORMAT_ESCAPE = re.compile(r"\\([tfrn])", re.IGNORECASE)
_FORMAT_ESCAPE_CHARS = {"t": "\t", "f": "\f", "r": "\r", "n": "\n"}

PathLike = Union[str, Path]


@dataclass(frozen=True)
class PropertyFormat:
    """The layout of a key/value line, parsed from a format string.

    Attributes:
        leading_whitespace: Whitespace before the key.
        separator: Separator between key and value, including whitespace.
        line_ending: Line terminator of every entry.
    """
    leading_whitespace: str
    separator: str
    line_ending: str


def _unescape_format(s: str) -> str:
    return _FORMAT_ESCAPE.sub(lambda m: _FORMAT_ESCAPE_CHARS[m.group(1).lower()], s)


def parse_format(format: str) -> PropertyFormat:
    """Parse a format string like ``<key> = <value>\\n``.

    Whitespace is given as spaces or the literal escapes ``\\t`` and
    ``\\f``; the line ending as literal ``\\n``, ``\\r`` or ``\\r\\n``.
    The placeholders are matched case-insensitively.

    Raises:
        InvalidFormatError: If the format string is malformed.
    """
    match = FORMAT_PATTERN.fullmatch(format)
    if match is None:
        raise InvalidFormatError(format)

    return PropertyFormat(
        leading_whitespace=_unescape_format(match.group("leading_whitespace")),
        separator=_unescape_format(match.group("separator")),
        line_ending=_unescape_format(match.group("line_ending")),
    )


class Reformatter:
    """Reformats and reorders the entries of .properties documents.

    Every operation computes the complete new sequence of entries before
    the document is changed, so a failing operation leaves it untouched.
    """

    def __init__(self, options: Optional[ReformatOptions] = None):
        """Initialize the reformatter.

        Args:
            options: Reformat options (format, comment attachment, charset).
        """
        self.options = options or ReformatOptions()

    # Entry level

    def reformat_entries(self, entries: Iterable[Entry]) -> list[Entry]:
        """Apply the configured format to every entry.

        Args:
            entries: The entries to reformat. They are not modified.

        Returns:
            New entries in the same order.
        """
        property_format = parse_format(self.options.format)
        result = []

        for entry in entries:
            check_entry(entry)
            if isinstance(entry, BasicEntry):
                content = entry.content.rstrip("\r\n")
                result.append(BasicEntry(content + property_format.line_ending))
                continue

            key, value = entry.key, entry.value
            if self.options.reformat_key_and_value:
                key = escape_key(unescape(key))
                value = escape_value(unescape(value))

            result.append(PropertyEntry(
                key=key,
                value=value,
                leading_whitespace=property_format.leading_whitespace,
                separator=property_format.separator,
                line_ending=property_format.line_ending,
            ))

        return result

    def reorder_entries_by_key(self, entries: Iterable[Entry]) -> list[Entry]:
        """Sort entries by key, moving comments along with their property."""
        attach = self.options.attach_comments_to
        groups = group_entries(entries, attach)
        return flatten(sort_groups(groups, attach))

    def reorder_entries_by_template(
        self,
        template: Iterable[Entry],
        entries: Iterable[Entry]
    ) -> list[Entry]:
        """Order entries like the properties of a template.

        Groups whose key appears in the template come first, in template
        order. All other groups follow in their original order.

        Args:
            template: Entries whose property order is used. Not modified.
            entries: Entries to reorder.

        Returns:
            The reordered entries.
        """
        groups = group_entries(entries, self.options.attach_comments_to)
        ordered = []

        for template_entry in template:
            if not isinstance(check_entry(template_entry), PropertyEntry):
                continue
            key = unescape(template_entry.key)
            for i, group in enumerate(groups):
                if group.key is not None and unescape(group.key) == key:
                    ordered.append(groups.pop(i))
                    break

        logger.debug(
            "Reordered %d groups by template, %d left over",
            len(ordered), len(groups)
        )
        return flatten(ordered + groups)

    # Document level

    def reformat(self, document) -> None:
        """Reformat all entries of a PropertiesDocument in place."""
        document.set_entries(self.reformat_entries(document.entries))

    def reorder_by_key(self, document) -> None:
        """Sort a PropertiesDocument by key in place."""
        document.set_entries(self.reorder_entries_by_key(document.entries))

    def reorder_by_template(self, template, document) -> None:
        """Order a PropertiesDocument like the given template document."""
        document.set_entries(
            self.reorder_entries_by_template(template.entries, document.entries)
        )

    # File level

    def reformat_file(self, path: PathLike) -> None:
        """Reformat a .properties file in place."""
        entries = read_entries(path, self.options.charset)
        self._write(path, self.reformat_entries(entries))

    def reorder_file_by_key(self, path: PathLike) -> None:
        """Sort a .properties file by key in place."""
        entries = read_entries(path, self.options.charset)
        self._write(path, self.reorder_entries_by_key(entries))

    def reorder_file_by_template(self, template_path: PathLike, path: PathLike) -> None:
        """Order a .properties file like the template file.

        Both files are read with the configured charset.
        """
        template = read_entries(template_path, self.options.charset)
        entries = read_entries(path, self.options.charset)
        self._write(path, self.reorder_entries_by_template(template, entries))

    def _write(self, path: PathLike, entries: list[Entry]) -> None:
        write_entries(path, entries, self.options.to_write_options())
