"""Grouping of entries for reordering.

Comments and blank lines usually describe the property next to them. When
properties are reordered, they are moved together with the property they
are attached to. A ``Group`` is such a unit: some basic entries and at most
one property entry.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from ..config import AttachCommentsTo
from ..entries import Entry, PropertyEntry, check_entry


@dataclass
class Group:
    """A unit of entries that is moved as a whole when reordering.

    Attributes:
        entries: The entries in file order. Never empty, with at most one
            PropertyEntry.
    """
    entries: list[Entry]

    def __post_init__(self):
        if not self.entries:
            raise ValueError("A group must contain at least one entry")

        property_entries = [
            entry for entry in self.entries
            if isinstance(check_entry(entry), PropertyEntry)
        ]
        if len(property_entries) > 1:
            keys = ", ".join(entry.key for entry in property_entries)
            raise ValueError(f"A group may contain only one property entry, got: {keys}")

    @property
    def property_entry(self) -> Optional[PropertyEntry]:
        for entry in self.entries:
            if isinstance(entry, PropertyEntry):
                return entry
        return None

    @property
    def key(self) -> Optional[str]:
        """The escaped key of the group's property, None for comment-only groups."""
        entry = self.property_entry
        return entry.key if entry is not None else None


def group_entries(entries: Iterable[Entry], attach: AttachCommentsTo) -> list[Group]:
    """Split entries into groups according to the attachment policy.

    Args:
        entries: Entries in file order.
        attach: Which property basic entries belong to.

    Returns:
        The groups in file order. Flattening them gives back the entries.
    """
    entries = [check_entry(entry) for entry in entries]

    if attach == AttachCommentsTo.ORIGINAL_POSITION:
        return [Group([entry]) for entry in entries]

    groups = []
    current: list[Entry] = []

    if attach == AttachCommentsTo.NEXT:
        for entry in entries:
            current.append(entry)
            if isinstance(entry, PropertyEntry):
                groups.append(Group(current))
                current = []
    elif attach == AttachCommentsTo.PREV:
        for entry in entries:
            if isinstance(entry, PropertyEntry) and current:
                groups.append(Group(current))
                current = []
            current.append(entry)
    else:
        raise ValueError(f"Unknown comment attachment: {attach!r}")

    if current:
        groups.append(Group(current))
    return groups


def sort_groups(groups: Iterable[Group], attach: AttachCommentsTo) -> list[Group]:
    """Sort groups by their escaped key.

    The sort is stable and compares keys by code point. Groups without a key
    go to the end for NEXT and to the front for PREV. With
    ORIGINAL_POSITION, groups without a key keep their position and only
    property groups are sorted into the remaining positions.
    """
    groups = list(groups)

    def by_key(group: Group) -> str:
        return group.key

    keyed = [group for group in groups if group.key is not None]
    keyless = [group for group in groups if group.key is None]

    if attach == AttachCommentsTo.NEXT:
        return sorted(keyed, key=by_key) + keyless
    if attach == AttachCommentsTo.PREV:
        return keyless + sorted(keyed, key=by_key)
    if attach == AttachCommentsTo.ORIGINAL_POSITION:
        positions = [i for i, group in enumerate(groups) if group.key is not None]
        result = list(groups)
        for position, group in zip(positions, sorted(keyed, key=by_key)):
            result[position] = group
        return result

    raise ValueError(f"Unknown comment attachment: {attach!r}")


def flatten(groups: Iterable[Group]) -> list[Entry]:
    return [entry for group in groups for entry in group.entries]
