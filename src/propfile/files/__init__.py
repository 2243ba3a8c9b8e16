"""Reading and writing .properties files."""

from .reader import read_entries, read_text
from .writer import PropertiesWriter, write_entries

__all__ = ["PropertiesWriter", "read_entries", "read_text", "write_entries"]
