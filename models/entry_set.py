# -*- coding: utf-8 -*-
"""
ResxSync Resource Entry Set

Ordered key -> entry storage for one language of one resource.
"""

from typing import Dict, Iterable, Iterator, Optional

from resxsync_models import ResourceEntry
from resxsync_exceptions import DuplicateKeyError, KeyNotFoundError


class ResourceEntrySet:
    """
    Keys in insertion order with O(1) lookup.

    Raises no notifications; that is the owning holder's job.
    """

    def __init__(self, entries: Optional[Iterable[ResourceEntry]] = None):
        self._entries: Dict[str, ResourceEntry] = {}
        for entry in entries or ():
            self._entries[entry.key] = entry.copy()

    def get(self, key: str) -> Optional[ResourceEntry]:
        """Get the entry for a key, or None if absent."""
        return self._entries.get(key)

    def get_value(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def set(self, key: str, value: Optional[str], comment: Optional[str] = None) -> ResourceEntry:
        """Create or overwrite an entry. Existing keys keep their position."""
        if not key:
            raise ValueError("Resource key must be a non-empty string")
        entry = self._entries.get(key)
        if entry is None:
            entry = ResourceEntry(key, value, comment)
            self._entries[key] = entry
        else:
            entry.value = value
            entry.comment = comment
        return entry

    def remove(self, key: str) -> ResourceEntry:
        if key not in self._entries:
            raise KeyNotFoundError(f"Key not found: {key}", key=key)
        return self._entries.pop(key)

    def rename(self, old_key: str, new_key: str):
        """Rename a key in place, keeping its position."""
        if old_key not in self._entries:
            raise KeyNotFoundError(f"Key not found: {old_key}", key=old_key)
        if new_key in self._entries:
            raise DuplicateKeyError(f"Key already exists: {new_key}", key=new_key)
        if not new_key:
            raise ValueError("Resource key must be a non-empty string")

        renamed = {}
        for key, entry in self._entries.items():
            if key == old_key:
                entry.key = new_key
                renamed[new_key] = entry
            else:
                renamed[key] = entry
        self._entries = renamed

    def keys(self) -> Iterator[str]:
        """Lazy sequence of keys in insertion order."""
        return iter(self._entries)

    def entries(self) -> Iterator[ResourceEntry]:
        return iter(self._entries.values())

    def copy(self) -> 'ResourceEntrySet':
        return ResourceEntrySet(self._entries.values())

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResourceEntry]:
        return self.entries()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResourceEntrySet):
            return NotImplemented
        return list(self._entries.values()) == list(other._entries.values())

    def __repr__(self) -> str:
        return f"ResourceEntrySet({len(self._entries)} entries)"
