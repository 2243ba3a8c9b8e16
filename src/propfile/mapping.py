"""A dict-like view on a PropertiesDocument."""

from collections.abc import Iterator, MutableMapping
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .config import DEFAULT_CHARSET, WriteOptions
from .core import PropertiesDocument


class PropertiesMapping(MutableMapping[str, str]):
    """Mutable mapping of unescaped keys to unescaped values.

    All changes go to the underlying document, so saving keeps the
    comments and formatting of the original file.
    """

    def __init__(self, document: Optional[PropertiesDocument] = None):
        self.document = document if document is not None else PropertiesDocument()

    @classmethod
    def from_path(cls, path: Union[str, Path], charset: str = DEFAULT_CHARSET) -> "PropertiesMapping":
        return cls(PropertiesDocument.from_path(path, charset))

    def __getitem__(self, key: str) -> str:
        if key not in self.document:
            raise KeyError(key)
        return self.document.get(key)

    def __setitem__(self, key: str, value: str) -> None:
        self.document.set(key, value)

    def __delitem__(self, key: str) -> None:
        if key not in self.document:
            raise KeyError(key)
        # Duplicates of the key would show up again after a single removal
        while self.document.remove(key):
            pass

    def __iter__(self) -> Iterator[str]:
        return iter(self.document.keys())

    def __len__(self) -> int:
        return self.document.property_count

    def __repr__(self) -> str:
        return f"PropertiesMapping({self.document.to_dict()!r})"

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a value, or the default if the key is missing."""
        return self.document.get(key, default)

    def set_property(self, key: str, value: str) -> Optional[str]:
        """Set a value and return the previous one (None if the key is new)."""
        previous = self.document.get(key)
        self.document.set(key, value)
        return previous

    def save(self, target: Union[str, Path, BinaryIO], options: Optional[WriteOptions] = None) -> None:
        """Save the underlying document, updating the file if it exists."""
        self.document.save_to(target, options)
