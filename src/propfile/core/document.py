"""The format-preserving .properties document."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import DEFAULT_CHARSET, MissingKeyAction, ReformatOptions, WriteOptions
from ..entries import BasicEntry, Entry, EntryParser, PropertyEntry, check_entry
from ..errors import InvalidUnicodeEscape
from ..escaping import comment_out, escape_key, escape_value, unescape
from ..files import read_text, write_entries
from ..reorder import Reformatter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PropertiesDocument:
    """An ordered list of .properties entries with lookup by key.

    Every line of the source is kept: comments, blank lines, whitespace,
    separators and line endings. Writing an unmodified document gives back
    the content it was read from. Changing a value only touches the value
    of that one entry.

    Keys and values passed to and returned from the document are always
    unescaped. Entries hold the escaped text.

    If a key occurs more than once, the last occurrence wins. The earlier
    ones stay in the document until they are removed explicitly.

    Attributes:
        diagnostics: Invalid unicode escapes found while unescaping the keys
            and values of this document.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        """Initialize the document.

        Args:
            entries: Initial entries, added in order.
        """
        self._entries: list[Entry] = []
        self._index: dict[str, PropertyEntry] = {}
        self.diagnostics: list[InvalidUnicodeEscape] = []

        for entry in entries or []:
            self.append(entry)

    # Construction

    @classmethod
    def from_text(cls, text: str) -> "PropertiesDocument":
        """Parse a document from the decoded content of a .properties file."""
        document = cls()
        for entry in EntryParser().parse_text(text):
            document.append(entry)
            if isinstance(entry, PropertyEntry):
                unescape(entry.value, document.diagnostics)
        return document

    @classmethod
    def from_path(cls, path: PathLike, charset: str = DEFAULT_CHARSET) -> "PropertiesDocument":
        """Read a document from a file.

        Raises:
            PropertiesIOError: If the file cannot be read or decoded.
        """
        return cls.from_text(read_text(path, charset))

    @classmethod
    def from_stream(cls, stream: BinaryIO, charset: str = DEFAULT_CHARSET) -> "PropertiesDocument":
        """Read a document from a binary stream. The stream is left open."""
        return cls.from_text(read_text(stream, charset))

    @classmethod
    def from_document(cls, other: "PropertiesDocument") -> "PropertiesDocument":
        """Create an independent copy of another document."""
        return other.copy()

    # Entry access

    @property
    def entries(self) -> list[Entry]:
        """A copy of the entry list in document order."""
        return list(self._entries)

    @property
    def entry_count(self) -> int:
        """Number of entries, comments and blank lines included."""
        return len(self._entries)

    @property
    def property_count(self) -> int:
        """Number of distinct keys."""
        return len(self._index)

    def append(self, entry: Entry) -> None:
        """Add an entry at the end of the document.

        A PropertyEntry becomes the entry found for its key.

        Raises:
            TypeError: If the entry is of an unknown type.
        """
        self._entries.append(check_entry(entry))
        if isinstance(entry, PropertyEntry):
            self._index[unescape(entry.key, self.diagnostics)] = entry

    def remove_entry(self, entry: Entry) -> bool:
        """Remove all entries equal to the given one.

        Returns:
            True if at least one entry was removed.
        """
        remaining = [e for e in self._entries if e != entry]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._rebuild_index()
        return True

    def replace(self, old: Entry, new: Entry) -> bool:
        """Replace the first entry equal to ``old`` with ``new``.

        Returns:
            True if an entry was replaced.
        """
        check_entry(new)
        for i, entry in enumerate(self._entries):
            if entry == old:
                self._entries[i] = new
                self._rebuild_index()
                return True
        return False

    def set_entries(self, entries: Iterable[Entry]) -> None:
        """Replace all entries of the document.

        Raises:
            TypeError: If any entry is of an unknown type. The document is
                unchanged in that case.
        """
        self._entries = [check_entry(entry) for entry in entries]
        self._rebuild_index()

    def clear(self) -> None:
        self._entries = []
        self._index = {}

    def get_property_entry(self, key: str) -> Optional[PropertyEntry]:
        """Get the entry holding the given unescaped key."""
        return self._index.get(key)

    def _rebuild_index(self) -> None:
        self._index = {}
        for entry in self._entries:
            if isinstance(entry, PropertyEntry):
                self._index[unescape(entry.key)] = entry

    # Key/value access

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get the unescaped value of a key.

        Args:
            key: The unescaped key.
            default: Returned if the key does not exist.

        Returns:
            The unescaped value of the last entry with this key.
        """
        entry = self._index.get(key)
        if entry is None:
            return default
        return unescape(entry.value)

    def set(self, key: str, value: str) -> None:
        """Set the value of a key.

        An existing entry keeps its position and formatting, only its value
        is replaced. A new key is appended as ``key = value``.

        Args:
            key: The unescaped key.
            value: The unescaped value.
        """
        entry = self._index.get(key)
        if entry is not None:
            entry.value = escape_value(value)
        else:
            self.append(PropertyEntry(escape_key(key), escape_value(value)))

    def remove(self, key: str) -> bool:
        """Remove the entry of a key.

        Only the entry found for the key is removed. If the key occurs more
        than once, the previous occurrence takes its place.

        Returns:
            True if an entry was removed.
        """
        entry = self._index.get(key)
        if entry is None:
            return False
        self._entries = [e for e in self._entries if e is not entry]
        self._rebuild_index()
        return True

    def contains_key(self, key: str) -> bool:
        """Check whether the document holds the given unescaped key."""
        return key in self._index

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def keys(self) -> list[str]:
        """All unescaped keys, in order of their first occurrence."""
        return list(self._index)

    def values(self) -> list[str]:
        """The unescaped values, in the same order as ``keys()``."""
        return [unescape(entry.value) for entry in self._index.values()]

    def to_dict(self) -> dict[str, str]:
        """The effective key/value pairs as a plain dict."""
        return {key: unescape(entry.value) for key, entry in self._index.items()}

    # Copying and comparison

    def copy(self) -> "PropertiesDocument":
        """Create an independent copy. Entries are copied too."""
        document = PropertiesDocument()
        document.set_entries(entry.copy() for entry in self._entries)
        document.diagnostics = list(self.diagnostics)
        return document

    def __copy__(self) -> "PropertiesDocument":
        return self.copy()

    def __deepcopy__(self, memo) -> "PropertiesDocument":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertiesDocument):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"PropertiesDocument(entries={self._entries!r})"

    # Serialization

    def to_text(self) -> str:
        """The full file content, every entry written as it was parsed."""
        return "".join(entry.to_text() for entry in self._entries)

    def overwrite(self, target: Union[PathLike, BinaryIO], options: Optional[WriteOptions] = None) -> None:
        """Write this document, replacing any previous content of the target.

        Missing parent directories of a file target are created.

        Args:
            target: Path of a file, or a binary stream (left open).
            options: Charset and unicode handling.

        Raises:
            PropertiesIOError: If writing fails.
        """
        write_entries(target, self._entries, options)

    def update(self, path: PathLike, options: Optional[WriteOptions] = None) -> None:
        """Write the properties of this document into an existing file.

        The file is read again and only its values are changed, so its
        comments, order and formatting are kept. Keys it does not contain
        yet are appended. Keys of the file that this document does not
        have are handled by ``options.missing_key_action``.

        Args:
            path: The file to update.
            options: Charset, unicode handling and missing key action.

        Raises:
            PropertiesIOError: If reading or writing fails.
        """
        options = options or WriteOptions()
        target = PropertiesDocument.from_path(path, options.charset)
        target._update_from(self, options.missing_key_action)
        target.overwrite(path, options)

    def save_to(self, target: Union[PathLike, BinaryIO], options: Optional[WriteOptions] = None) -> None:
        """Update the file if it exists, overwrite the target otherwise."""
        if isinstance(target, (str, Path)) and Path(target).exists():
            self.update(target, options)
        else:
            self.overwrite(target, options)

    def _update_from(self, source: "PropertiesDocument", missing_key_action: MissingKeyAction) -> None:
        changed = added = 0
        for entry in source._entries:
            if not isinstance(entry, PropertyEntry):
                continue
            existing = self._index.get(unescape(entry.key))
            if existing is None:
                self.append(entry.copy())
                added += 1
            elif unescape(existing.value) != unescape(entry.value):
                existing.value = entry.value
                changed += 1

        logger.debug("Updating properties: %d changed, %d added", changed, added)

        if missing_key_action == MissingKeyAction.NOTHING:
            return

        entries = []
        for entry in self._entries:
            if isinstance(entry, PropertyEntry) and unescape(entry.key) not in source:
                logger.debug("Handling missing key %r: %s", entry.key, missing_key_action.value)
                if missing_key_action == MissingKeyAction.DELETE:
                    continue
                entry = BasicEntry(comment_out(entry.to_text()))
            entries.append(entry)
        self.set_entries(entries)

    # Reformatting

    def reformat(self, options: Optional[ReformatOptions] = None) -> None:
        """Apply a uniform format to all entries. See ``Reformatter``."""
        Reformatter(options).reformat(self)

    def reorder_by_key(self, options: Optional[ReformatOptions] = None) -> None:
        Reformatter(options).reorder_by_key(self)

    def reorder_by_template(
        self,
        template: "PropertiesDocument",
        options: Optional[ReformatOptions] = None
    ) -> None:
        """Order the entries like the properties in the template."""
        Reformatter(options).reorder_by_template(template, self)
