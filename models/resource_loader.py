# -*- coding: utf-8 -*-
"""
ResxSync Resource Loader

Manages the opened project:
- Discovery and loading of every resource under a root folder
- Used-languages tracking across resources
- Project-wide save, export and missing-translation views
"""

import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from resxsync_enums import LoadStage
from resxsync_models import LoadProgress, MissingTranslation, RowEvaluationConfig, SearchParams
from resxsync_exceptions import (
    DirectoryNotFoundError, FileOperationError, ResxSyncError, SaveError, UnsavedChangesError,
)
from core.locale_utils import normalize_locale
from core.resource_discovery import discover_resources
from core.resx_format import ResxFileFormat
from core.search_manager import SearchManager
from models.observable import Observable
from models.resource_holder import ResourceHolder
from resxsync_logger import get_logger

logger = get_logger("models.resource_loader")


class ResourceLoader(Observable):
    """
    Owns the resource holders of one opened folder.

    Events:
        'resources_changed' ()
        'load_progress' (progress: LoadProgress)
        'languages_changed' (used_languages: List[str])
        'dirty_changed' (holder: ResourceHolder, is_dirty: bool)
    """

    def __init__(self, file_format=None, comments_in_all_languages: bool = False,
                 search_manager: Optional[SearchManager] = None,
                 hide_empty_resources: bool = False, hide_nontranslated_resources: bool = False):
        super().__init__(['resources_changed', 'load_progress', 'languages_changed', 'dirty_changed'])
        self._format = file_format or ResxFileFormat()
        self._comments_in_all_languages = comments_in_all_languages
        self._search_manager = search_manager or SearchManager()
        self._hide_empty_resources = hide_empty_resources
        self._hide_nontranslated_resources = hide_nontranslated_resources

        self._opened_path: Optional[Path] = None
        self._resources: List[ResourceHolder] = []
        self._used_languages: List[str] = []
        # resource id -> dirty_changed forwarder
        self._forwarders: Dict[str, object] = {}

    # =============================================================================
    # PROPERTIES
    # =============================================================================

    @property
    def opened_path(self) -> Optional[Path]:
        return self._opened_path

    @property
    def is_open(self) -> bool:
        return self._opened_path is not None

    @property
    def resources(self) -> List[ResourceHolder]:
        """Holders sorted by resource id."""
        return list(self._resources)

    @property
    def visible_resources(self) -> List[ResourceHolder]:
        """
        Holders left after the display filters.

        hide_empty_resources skips resources without keys and
        hide_nontranslated_resources skips resources without any language file.
        """
        return [holder for holder in self._resources
                if not (self._hide_empty_resources and not holder.keys())
                and not (self._hide_nontranslated_resources and not holder.locales)]

    @property
    def hide_empty_resources(self) -> bool:
        return self._hide_empty_resources

    @hide_empty_resources.setter
    def hide_empty_resources(self, value: bool):
        if value != self._hide_empty_resources:
            self._hide_empty_resources = value
            self._notify('resources_changed')

    @property
    def hide_nontranslated_resources(self) -> bool:
        return self._hide_nontranslated_resources

    @hide_nontranslated_resources.setter
    def hide_nontranslated_resources(self, value: bool):
        if value != self._hide_nontranslated_resources:
            self._hide_nontranslated_resources = value
            self._notify('resources_changed')

    @property
    def has_unsaved_changes(self) -> bool:
        return any(holder.is_dirty for holder in self._resources)

    @property
    def comments_in_all_languages(self) -> bool:
        return self._comments_in_all_languages

    @comments_in_all_languages.setter
    def comments_in_all_languages(self, value: bool):
        self._comments_in_all_languages = value
        for holder in self._resources:
            holder.comments_in_all_languages = value

    def get_resource(self, resource_id: str) -> Optional[ResourceHolder]:
        for holder in self._resources:
            if holder.id == resource_id:
                return holder
        return None

    def get_dirty_resources(self) -> List[ResourceHolder]:
        return [holder for holder in self._resources if holder.is_dirty]

    def get_used_languages(self) -> List[str]:
        """Sorted union of the locales of every resource."""
        return list(self._used_languages)

    def can_close(self) -> bool:
        return not self.has_unsaved_changes

    # =============================================================================
    # OPEN / CLOSE
    # =============================================================================

    def open_project(self, path, discard_changes: bool = False):
        """
        Load every resource under a folder, replacing the current project.

        The current project is kept if the folder cannot be read.

        Args:
            path: Project root folder.
            discard_changes: Drop unsaved changes of the current project.

        Raises:
            UnsavedChangesError: Unsaved changes exist and were not discarded.
            DirectoryNotFoundError: The folder does not exist.
            FileOperationError: A resource file could not be read.
        """
        self._ensure_can_discard(discard_changes)

        root = Path(path)
        if not root.is_dir():
            raise DirectoryNotFoundError(f"Directory does not exist: {root}", path=str(root))
        root = root.resolve()

        self._report(LoadProgress(LoadStage.DISCOVERING, f"Scanning {root}"))
        groups = discover_resources(root)

        holders = []
        for index, group in enumerate(groups, start=1):
            self._report(LoadProgress(LoadStage.LOADING, "Loading resources",
                                      file_name=group.resource_id, current=index, total=len(groups)))
            holders.append(ResourceHolder.from_group(group, self._format, self._comments_in_all_languages))

        self._detach_all()
        self._opened_path = root
        self._resources = holders
        for holder in holders:
            self._attach(holder)

        logger.info(f"Project opened: {root} ({len(holders)} resource(s))")
        self._report(LoadProgress(LoadStage.DONE, "Resources loaded",
                                  current=len(groups), total=len(groups)))
        self._notify('resources_changed')
        self._refresh_used_languages(force_notify=True)

    def reload(self, discard_changes: bool = False) -> bool:
        """
        Reopen the current folder from disk.

        Returns:
            False if no project is open

        Raises:
            UnsavedChangesError: Unsaved changes exist and were not discarded.
        """
        if not self.is_open:
            return False
        logger.info(f"Reloading project: {self._opened_path}")
        self.open_project(self._opened_path, discard_changes)
        return True

    def close(self, discard_changes: bool = False):
        """Forget the opened project."""
        self._ensure_can_discard(discard_changes)
        if not self.is_open:
            return

        logger.info(f"Project closed: {self._opened_path}")
        self._detach_all()
        self._opened_path = None
        self._resources = []
        self._notify('resources_changed')
        self._refresh_used_languages(force_notify=True)

    def _ensure_can_discard(self, discard_changes: bool):
        if discard_changes or self.can_close():
            return
        dirty = [holder.id for holder in self.get_dirty_resources()]
        raise UnsavedChangesError(f"{len(dirty)} resource(s) have unsaved changes", resources=dirty)

    # =============================================================================
    # SAVE / EXPORT
    # =============================================================================

    def save_all(self):
        """
        Save every dirty resource in order, stopping at the first failure.

        Raises:
            SaveError: Names the resource that failed; earlier ones stay saved.
        """
        for holder in self._resources:
            if holder.is_dirty:
                self._save_holder(holder, holder.save)

    def save_all_without_nontranslatable_data(self, evaluation: Optional[RowEvaluationConfig] = None):
        """Save every resource, dropping language values of non-translatable rows."""
        for holder in self._resources:
            self._save_holder(holder, lambda h=holder: h.save_without_nontranslatable_data(evaluation))

    def _save_holder(self, holder: ResourceHolder, save):
        try:
            save()
        except (ResxSyncError, OSError) as e:
            file_path = e.file_path if isinstance(e, FileOperationError) else str(holder.file_path)
            logger.error(f"Failed to save {holder.id}: {e}")
            raise SaveError(f"Failed to save resource {holder.id}: {e}",
                            resource=holder.id, file_path=file_path) from e

    def export_to_zip(self, zip_path) -> int:
        """
        Write every resource file present on disk into a zip archive.

        Entries are stored relative to the project root.

        Returns:
            Number of files written
        """
        if not self.is_open:
            raise DirectoryNotFoundError("No project is open")

        files = []
        for holder in self._resources:
            files.append(holder.file_path)
            files.extend(language.file_path for language in holder.languages.values())
        files = [f for f in files if f.is_file()]

        zip_path = Path(zip_path)
        try:
            zip_path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for file_path in files:
                    zf.write(file_path, arcname=file_path.relative_to(self._opened_path).as_posix())
        except OSError as e:
            raise FileOperationError(f"Cannot write archive: {e}",
                                     file_path=str(zip_path), operation="export") from e

        logger.info(f"Exported {len(files)} file(s) to {zip_path}")
        return len(files)

    # =============================================================================
    # PROJECT-WIDE VIEWS
    # =============================================================================

    def add_language(self, locale: str, copy_default_values: bool = False,
                     resource_ids: Optional[Iterable[str]] = None) -> List[ResourceHolder]:
        """
        Add a language to every resource that lacks it (or to the given resources).

        Returns:
            Holders that received the language

        Raises:
            InvalidLocaleError: The tag is not a known culture; nothing is changed.
        """
        locale = normalize_locale(locale)
        wanted = set(resource_ids) if resource_ids is not None else None
        added = []
        for holder in self._resources:
            if wanted is not None and holder.id not in wanted:
                continue
            if holder.has_language(locale):
                continue
            holder.add_language(locale, copy_default_values)
            added.append(holder)
        return added

    def find_missing_translations(self, enabled_locales: Iterable[str],
                                  evaluation: Optional[RowEvaluationConfig] = None) -> List[MissingTranslation]:
        """
        Every (resource, locale) pair with at least one missing cell.

        A resource without the language file counts all translatable rows
        and is reported with language_exists False.
        """
        locales = list(enabled_locales)
        missing = []
        for holder in self._resources:
            for locale in locales:
                count = holder.count_missing(locale, evaluation)
                if count:
                    missing.append(MissingTranslation(holder.id, locale, count, holder.has_language(locale)))
        return missing

    def search(self, params: SearchParams):
        """Search keys, values and comments of every resource."""
        return self._search_manager.search(self._resources, params)

    # =============================================================================
    # INTERNAL
    # =============================================================================

    def _attach(self, holder: ResourceHolder):
        holder.subscribe('language_changed', self._on_language_changed)
        holder.subscribe('dirty_changed', self._dirty_forwarder(holder))

    def _detach_all(self):
        for holder in self._resources:
            holder.unsubscribe('language_changed', self._on_language_changed)
            forwarder = self._forwarders.pop(holder.id, None)
            if forwarder:
                holder.unsubscribe('dirty_changed', forwarder)

    def _dirty_forwarder(self, holder: ResourceHolder):
        def forward(is_dirty):
            self._notify('dirty_changed', holder, is_dirty)
        self._forwarders[holder.id] = forward
        return forward

    def _on_language_changed(self, holder: ResourceHolder):
        self._refresh_used_languages()

    def _refresh_used_languages(self, force_notify: bool = False):
        used = sorted({locale for holder in self._resources for locale in holder.locales})
        if used != self._used_languages or force_notify:
            self._used_languages = used
            self._notify('languages_changed', list(used))

    def _report(self, progress: LoadProgress):
        self._notify('load_progress', progress)
