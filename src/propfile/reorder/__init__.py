"""Reformatting and reordering of .properties entries."""

from .grouping import Group, flatten, group_entries, sort_groups
from .reformatter import PropertyFormat, Reformatter, parse_format

__all__ = [
    "Group",
    "PropertyFormat",
    "Reformatter",
    "flatten",
    "group_entries",
    "parse_format",
    "sort_groups",
]
