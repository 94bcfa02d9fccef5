# -*- coding: utf-8 -*-
"""
ResxSync Language Holder

Binds one ResourceEntrySet to a locale and its backing file, and keeps the
loaded snapshot used for dirty tracking and revert.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from models.entry_set import ResourceEntrySet
from resxsync_models import ResourceEntry
from resxsync_logger import get_logger

logger = get_logger("models.language_holder")


class LanguageHolder:
    """
    One language of one resource.

    The base (neutral) resource is a LanguageHolder with locale None.
    A holder created in memory has no snapshot and stays dirty until saved.
    """

    def __init__(self, file_path, locale: Optional[str], file_format,
                 entries: Optional[ResourceEntrySet] = None):
        """
        Args:
            file_path: Path of the backing .resx file (may not exist yet).
            locale: Normalized culture tag, or None for the base resource.
            file_format: Collaborator exposing load(path) and save(path, entries).
            entries: Initial entries for an in-memory holder.
        """
        self._file_path = Path(file_path)
        self._locale = locale
        self._format = file_format
        self._entries = entries if entries is not None else ResourceEntrySet()
        self._snapshot: Optional[ResourceEntrySet] = None
        # Entries read from the file whose key is not in the base resource
        self._orphans: List[ResourceEntry] = []

    # =============================================================================
    # PROPERTIES
    # =============================================================================

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    @property
    def is_base(self) -> bool:
        return self._locale is None

    @property
    def entries(self) -> ResourceEntrySet:
        return self._entries

    @property
    def orphans(self) -> List[ResourceEntry]:
        return list(self._orphans)

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def load(self, base_keys: Optional[Iterable[str]] = None):
        """
        Load entries from the backing file and reset the snapshot.

        Args:
            base_keys: Key set of the owning resource. When given, the loaded
                entries are aligned to it: missing keys get a None value and
                keys unknown to the base are kept aside as orphans.
        """
        loaded = self._format.load(self._file_path)
        self._entries = self._align(loaded, base_keys)
        self._snapshot = self._entries.copy()
        logger.debug(f"Loaded {self.display_name}: {len(self._entries)} keys")

    def load_from(self, entries: Iterable[ResourceEntry], base_keys: Optional[Iterable[str]] = None):
        """Adopt already-read entries as the loaded state."""
        self._entries = self._align(list(entries), base_keys)
        self._snapshot = self._entries.copy()

    def save(self, exclude_keys: Iterable[str] = ()):
        """
        Write entries to the backing file and take a new snapshot.

        Entries whose value is None are not written, so they load back as None.
        An orphan whose key has since been added to the entries is superseded
        by the entry and dropped.

        Args:
            exclude_keys: Keys to leave out of the written file.
        """
        excluded = set(exclude_keys)
        to_write = [e for e in self._entries
                    if e.value is not None and e.key not in excluded]
        superseded = [e.key for e in self._orphans if e.key in self._entries]
        if superseded:
            logger.debug(f"{self.display_name}: orphan key(s) now in use dropped: {', '.join(superseded)}")
            self._orphans = [e for e in self._orphans if e.key not in self._entries]
        to_write.extend(self._orphans)
        self._format.save(self._file_path, to_write)
        self._snapshot = self._entries.copy()
        logger.info(f"Saved {self.display_name} ({len(to_write)} entries)")

    def revert(self):
        """Restore the last loaded/saved state."""
        if self._snapshot is None:
            self._entries = ResourceEntrySet()
            return
        self._entries = self._snapshot.copy()

    def mark_saved(self):
        """Accept the current entries as the saved state without writing."""
        self._snapshot = self._entries.copy()

    def is_dirty(self) -> bool:
        """True if the entries differ by value from the last loaded/saved snapshot."""
        if self._snapshot is None:
            return True
        return self._entries != self._snapshot

    def replace_entries(self, entries: ResourceEntrySet):
        """Swap the entry set (used to roll back a failed multi-holder mutation)."""
        self._entries = entries

    # =============================================================================
    # UTILITY
    # =============================================================================

    def _align(self, loaded: List[ResourceEntry], base_keys: Optional[Iterable[str]]) -> ResourceEntrySet:
        self._orphans = []
        if base_keys is None:
            return ResourceEntrySet(loaded)

        by_key = {entry.key: entry for entry in loaded}
        keys = list(base_keys)
        aligned = ResourceEntrySet()
        for key in keys:
            entry = by_key.get(key)
            if entry is None:
                aligned.set(key, None)
            else:
                aligned.set(key, entry.value, entry.comment)

        known = set(keys)
        self._orphans = [entry.copy() for entry in loaded if entry.key not in known]
        if self._orphans:
            logger.warning(f"{self.display_name}: {len(self._orphans)} key(s) not present in the "
                           f"base resource kept aside: {', '.join(e.key for e in self._orphans[:5])}")
        return aligned

    @property
    def display_name(self) -> str:
        return f"{self._file_path.name} [{self._locale or 'default'}]"

    def __repr__(self) -> str:
        return f"LanguageHolder({self._file_path.name}, locale={self._locale}, keys={len(self._entries)})"
