"""Properties file entries and parsing."""

from .models import BasicEntry, Entry, PropertyEntry, check_entry
from .parser import EntryParser, LogicalLineReader, is_blank_or_comment

__all__ = [
    "BasicEntry",
    "Entry",
    "EntryParser",
    "LogicalLineReader",
    "PropertyEntry",
    "check_entry",
    "is_blank_or_comment",
]
