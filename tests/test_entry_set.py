# -*- coding: utf-8 -*-
"""
Unit Tests for ResourceEntrySet and LanguageHolder
"""

import pytest

from models.entry_set import ResourceEntrySet
from models.language_holder import LanguageHolder
from resxsync_models import ResourceEntry
from resxsync_exceptions import DuplicateKeyError, KeyNotFoundError


@pytest.fixture
def entry_set():
    return ResourceEntrySet([
        ResourceEntry("A", "a"),
        ResourceEntry("B", "b", "comment"),
        ResourceEntry("C", None),
    ])


class TestResourceEntrySet:
    """Tests for the ordered entry storage."""

    def test_keys_in_insertion_order(self, entry_set):
        """Keys come back in insertion order."""
        assert list(entry_set.keys()) == ["A", "B", "C"]

    def test_set_existing_keeps_position(self, entry_set):
        """Overwriting a key does not move it."""
        entry_set.set("A", "changed")
        assert list(entry_set.keys()) == ["A", "B", "C"]
        assert entry_set.get_value("A") == "changed"

    def test_set_new_appends(self, entry_set):
        """A new key goes to the end."""
        entry_set.set("D", "d")
        assert list(entry_set.keys())[-1] == "D"

    def test_set_rejects_empty_key(self, entry_set):
        """Empty keys are invalid."""
        with pytest.raises(ValueError):
            entry_set.set("", "x")

    def test_remove_missing_raises(self, entry_set):
        """Removing an unknown key raises KeyNotFoundError."""
        with pytest.raises(KeyNotFoundError) as exc:
            entry_set.remove("Z")
        assert exc.value.key == "Z"

    def test_rename_keeps_position(self, entry_set):
        """Renamed key stays where it was and keeps value/comment."""
        entry_set.rename("B", "B2")
        assert list(entry_set.keys()) == ["A", "B2", "C"]
        assert entry_set.get("B2").comment == "comment"
        assert "B" not in entry_set

    def test_rename_errors(self, entry_set):
        """Rename reports unknown source and existing target."""
        with pytest.raises(KeyNotFoundError):
            entry_set.rename("Z", "Y")
        with pytest.raises(DuplicateKeyError):
            entry_set.rename("A", "B")

    def test_copy_is_independent(self, entry_set):
        """Copies compare equal and do not share entries."""
        copy = entry_set.copy()
        assert copy == entry_set
        copy.set("A", "other")
        assert entry_set.get_value("A") == "a"
        assert copy != entry_set

    def test_none_and_empty_differ(self):
        """None (not populated) and "" (blank) are different values."""
        assert ResourceEntrySet([ResourceEntry("A", None)]) != ResourceEntrySet([ResourceEntry("A", "")])


class FakeFormat:
    """In-memory file format."""

    def __init__(self, files=None):
        self.files = files or {}

    def load(self, path):
        return [e.copy() for e in self.files.get(str(path), [])]

    def save(self, path, entries):
        self.files[str(path)] = [e.copy() for e in entries]


class TestLanguageHolder:
    """Tests for LanguageHolder snapshot handling."""

    def test_load_aligns_to_base_keys(self, tmp_path):
        """Missing keys load as None; unknown keys become orphans."""
        path = tmp_path / "Strings.fr.resx"
        fmt = FakeFormat({str(path): [ResourceEntry("B", "bee"), ResourceEntry("X", "extra")]})
        holder = LanguageHolder(path, "fr", fmt)

        holder.load(["A", "B"])

        assert list(holder.entries.keys()) == ["A", "B"]
        assert holder.entries.get_value("A") is None
        assert holder.entries.get_value("B") == "bee"
        assert [e.key for e in holder.orphans] == ["X"]
        assert not holder.is_dirty()

    def test_save_skips_none_and_keeps_orphans(self, tmp_path):
        """None values are not written; orphans are written back."""
        path = tmp_path / "Strings.fr.resx"
        fmt = FakeFormat({str(path): [ResourceEntry("X", "extra")]})
        holder = LanguageHolder(path, "fr", fmt)
        holder.load(["A", "B"])
        holder.entries.set("B", "bee")

        assert holder.is_dirty()
        holder.save()

        assert [e.key for e in fmt.files[str(path)]] == ["B", "X"]
        assert not holder.is_dirty()

    def test_new_holder_dirty_until_saved(self, tmp_path):
        """An in-memory holder has no snapshot."""
        holder = LanguageHolder(tmp_path / "New.de.resx", "de", FakeFormat())
        assert holder.is_dirty()
        holder.save()
        assert not holder.is_dirty()

    def test_revert_restores_snapshot(self, tmp_path):
        """Revert discards edits."""
        path = tmp_path / "Strings.resx"
        fmt = FakeFormat({str(path): [ResourceEntry("A", "a")]})
        holder = LanguageHolder(path, None, fmt)
        holder.load()
        holder.entries.set("A", "edited")

        holder.revert()

        assert holder.entries.get_value("A") == "a"
        assert not holder.is_dirty()
