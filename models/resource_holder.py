# -*- coding: utf-8 -*-
"""
ResxSync Resource Holder

Owns the base entry set of one logical resource plus its language variants:
- Key-set parity across the base and every language
- Row evaluation flags (missing / identical / not translatable)
- Dirty tracking, save and revert
- Extraction and write-back of texts for batch translation
"""

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import resxsync_config as config
from resxsync_enums import RowFlag, TranslationScope
from resxsync_models import ResourceEntry, RowEvaluationConfig, TranslateConfig, TranslationResult
from resxsync_exceptions import (
    DuplicateKeyError, InvalidLocaleError, KeyNotFoundError, LanguageAlreadyExistsError,
    LanguageNotFoundError, TranslationResultMismatchError,
)
from core.locale_utils import normalize_locale
from models.entry_set import ResourceEntrySet
from models.language_holder import LanguageHolder
from models.observable import Observable
from resxsync_logger import get_logger

logger = get_logger("models.resource_holder")


def evaluate_cell(base_value: Optional[str], value: Optional[str],
                  evaluation: RowEvaluationConfig) -> RowFlag:
    """Compute the flag of one cell from its base value and its language value."""
    if not evaluation.is_translatable(base_value):
        return RowFlag.NOT_TRANSLATABLE
    if value is None:
        return RowFlag.MISSING
    if value == base_value:
        return RowFlag.IDENTICAL
    return RowFlag.DEFAULT


class ResourceHolder(Observable):
    """
    One logical resource: base file plus language variants.

    Events:
        'dirty_changed' (is_dirty: bool)
        'language_changed' (holder: ResourceHolder)
        'rows_changed' (keys: List[str])

    Not thread-safe: exactly one owner mutates a holder at a time.
    """

    def __init__(self, resource_id: str, base: LanguageHolder,
                 languages: Optional[Dict[str, LanguageHolder]] = None,
                 file_format=None, comments_in_all_languages: bool = False):
        """
        Args:
            resource_id: Relative path of the base file without extension.
            base: Holder of the neutral resource (locale None).
            languages: Normalized locale -> LanguageHolder, already aligned to the base keys.
            file_format: Collaborator used for languages added later.
            comments_in_all_languages: Mirror base comment edits into every language.
        """
        super().__init__(['dirty_changed', 'language_changed', 'rows_changed'])
        self._id = resource_id
        self._base = base
        self._languages: Dict[str, LanguageHolder] = dict(languages or {})
        self._saved_languages: Dict[str, LanguageHolder] = dict(self._languages)
        self._format = file_format
        self.comments_in_all_languages = comments_in_all_languages

        # Flags are only computed by evaluate_all_rows()
        self._flags: Dict[str, Dict[str, RowFlag]] = {}
        self._evaluated_locales: Tuple[str, ...] = ()
        self._evaluation = RowEvaluationConfig()

        self._last_dirty = self.is_dirty

        logger.debug(f"ResourceHolder created: {resource_id} ({len(base.entries)} keys, "
                     f"languages: {', '.join(self._languages) or 'none'})")

    @classmethod
    def from_group(cls, group, file_format, comments_in_all_languages: bool = False) -> 'ResourceHolder':
        """
        Load a resource from a discovered ResourceGroup.

        When the base file does not exist, the base key set is the union of the
        variant keys (in first-seen order) with None values.
        """
        base = LanguageHolder(group.base_path, None, file_format)
        languages = {locale: LanguageHolder(path, locale, file_format)
                     for locale, path in sorted(group.variants.items())}

        if group.has_base_file:
            base.load()
            base_keys = list(base.entries.keys())
            for holder in languages.values():
                holder.load(base_keys)
        else:
            logger.warning(f"Base file missing for {group.resource_id}, using variant keys")
            loaded = {locale: file_format.load(h.file_path) for locale, h in languages.items()}
            base_keys = list(dict.fromkeys(e.key for entries in loaded.values() for e in entries))
            base.load_from([ResourceEntry(key) for key in base_keys])
            for locale, holder in languages.items():
                holder.load_from(loaded[locale], base_keys)

        return cls(group.resource_id, base, languages, file_format, comments_in_all_languages)

    # =============================================================================
    # PROPERTIES
    # =============================================================================

    @property
    def id(self) -> str:
        return self._id

    @property
    def base(self) -> LanguageHolder:
        return self._base

    @property
    def file_path(self) -> Path:
        return self._base.file_path

    @property
    def languages(self) -> Dict[str, LanguageHolder]:
        """Locale -> LanguageHolder, ordered by locale name."""
        return {locale: self._languages[locale] for locale in sorted(self._languages)}

    @property
    def locales(self) -> List[str]:
        return sorted(self._languages)

    @property
    def is_dirty(self) -> bool:
        """True if any owned file has unsaved changes, or the language set changed."""
        if self._base.is_dirty():
            return True
        if self._languages.keys() != self._saved_languages.keys():
            return True
        for locale, holder in self._languages.items():
            if holder is not self._saved_languages[locale] or holder.is_dirty():
                return True
        return False

    @property
    def evaluated_locales(self) -> Tuple[str, ...]:
        return self._evaluated_locales

    def keys(self) -> List[str]:
        return list(self._base.entries.keys())

    def has_language(self, locale: str) -> bool:
        return locale in self._languages

    def get_value(self, key: str, locale: Optional[str] = None) -> Optional[str]:
        """Value of a cell; locale None (or DEFAULT_LANGUAGE) reads the base resource."""
        holder = self._holder(locale)
        self._require_key(key)
        return holder.entries.get_value(key)

    def get_comment(self, key: str, locale: Optional[str] = None) -> Optional[str]:
        holder = self._holder(locale)
        self._require_key(key)
        entry = holder.entries.get(key)
        return entry.comment if entry else None

    def check_key_parity(self) -> bool:
        """True if every language has exactly the base key set, in any order."""
        base_keys = set(self._base.entries.keys())
        return all(set(h.entries.keys()) == base_keys for h in self._languages.values())

    # =============================================================================
    # KEY OPERATIONS
    # =============================================================================

    def add_key(self, key: str, default_value: Optional[str] = None, comment: Optional[str] = None):
        """
        Add a key to the base and, with a None value, to every language.

        The default text is never copied into the languages so the new key
        shows up as missing everywhere.
        """
        if not key:
            raise ValueError("Resource key must be a non-empty string")
        if key in self._base.entries:
            raise DuplicateKeyError(f"Key already exists: {key}", key=key, resource=self._id)

        language_comment = comment if self.comments_in_all_languages else None

        def add(holder: LanguageHolder):
            if holder.is_base:
                holder.entries.set(key, default_value, comment)
            else:
                holder.entries.set(key, None, language_comment)

        self._mutate_all(add)
        logger.debug(f"[{self._id}] key added: {key}")
        self._after_rows_changed([key])

    def delete_key(self, key: str):
        """Remove a key from the base and every language, all or nothing."""
        self._require_key(key)
        self._mutate_all(lambda holder: holder.entries.remove(key))
        self._flags.pop(key, None)
        logger.debug(f"[{self._id}] key deleted: {key}")
        self._after_rows_changed([key])

    def rename_key(self, old_key: str, new_key: str):
        """Rename a key in the base and every language, all or nothing."""
        self._require_key(old_key)
        if not new_key:
            raise ValueError("Resource key must be a non-empty string")
        if new_key in self._base.entries:
            raise DuplicateKeyError(f"Key already exists: {new_key}", key=new_key, resource=self._id)

        self._mutate_all(lambda holder: holder.entries.rename(old_key, new_key))
        if old_key in self._flags:
            self._flags[new_key] = self._flags.pop(old_key)
        logger.debug(f"[{self._id}] key renamed: {old_key} -> {new_key}")
        self._after_rows_changed([old_key, new_key])

    def set_value(self, key: str, value: Optional[str], locale: Optional[str] = None):
        """Edit one cell. Flags are refreshed by the next evaluate_all_rows()."""
        holder = self._holder(locale)
        self._require_key(key)
        entry = holder.entries.get(key)
        holder.entries.set(key, value, entry.comment if entry else None)
        self._after_rows_changed([key])

    def set_comment(self, key: str, comment: Optional[str], locale: Optional[str] = None):
        """Edit a comment; base edits are mirrored when comments_in_all_languages is on."""
        holder = self._holder(locale)
        self._require_key(key)
        targets = [holder]
        if holder.is_base and self.comments_in_all_languages:
            targets.extend(self._languages.values())
        for target in targets:
            target.entries.set(key, target.entries.get_value(key), comment)
        self._after_rows_changed([key])

    def trim_whitespace(self, keys: Optional[Iterable[str]] = None,
                        locales: Optional[Iterable[str]] = None) -> int:
        """
        Strip leading/trailing whitespace from cell values.

        Args:
            keys: Rows to trim, all rows if None.
            locales: Columns to trim (DEFAULT_LANGUAGE for the base), all if None.

        Returns:
            Number of cells changed
        """
        keys = list(keys) if keys is not None else self.keys()
        for key in keys:
            self._require_key(key)
        holders = ([self._holder(loc) for loc in locales] if locales is not None
                   else [self._base] + list(self._languages.values()))

        changed_keys = []
        count = 0
        for holder in holders:
            for key in keys:
                entry = holder.entries.get(key)
                if entry.value is not None and entry.value != entry.value.strip():
                    entry.value = entry.value.strip()
                    count += 1
                    changed_keys.append(key)

        if count:
            self._after_rows_changed(list(dict.fromkeys(changed_keys)))
        return count

    # =============================================================================
    # LANGUAGE OPERATIONS
    # =============================================================================

    def add_language(self, locale: str, copy_default_values: bool = False) -> LanguageHolder:
        """
        Add a language variant holding every base key.

        Args:
            locale: Culture tag, normalized before use.
            copy_default_values: Seed values with the base values instead of None.
        """
        locale = normalize_locale(locale)
        if locale in self._languages:
            raise LanguageAlreadyExistsError(f"Language already exists: {locale}",
                                             locale=locale, resource=self._id)

        entries = ResourceEntrySet()
        for entry in self._base.entries:
            value = entry.value if copy_default_values else None
            comment = entry.comment if self.comments_in_all_languages else None
            entries.set(entry.key, value, comment)

        base_path = self._base.file_path
        stem = base_path.name[:-len(config.RESX_EXTENSION)] if base_path.name.endswith(config.RESX_EXTENSION) else base_path.stem
        file_path = base_path.with_name(f"{stem}.{locale}{config.RESX_EXTENSION}")

        holder = LanguageHolder(file_path, locale, self._format, entries)
        self._languages[locale] = holder
        logger.info(f"[{self._id}] language added: {locale}")

        self._notify('language_changed', self)
        self._update_dirty()
        return holder

    def delete_language(self, locale: str):
        """
        Remove a language variant from memory.

        The backing file is left on disk; deleting it is the caller's decision.
        """
        locale = self._require_language(locale)
        del self._languages[locale]
        for flags in self._flags.values():
            flags.pop(locale, None)
        self._evaluated_locales = tuple(l for l in self._evaluated_locales if l != locale)
        logger.info(f"[{self._id}] language removed: {locale}")

        self._notify('language_changed', self)
        self._update_dirty()

    # =============================================================================
    # ROW EVALUATION
    # =============================================================================

    def evaluate_all_rows(self, enabled_locales: Iterable[str],
                          evaluation: Optional[RowEvaluationConfig] = None,
                          keys: Optional[Iterable[str]] = None) -> List[str]:
        """
        Recompute row flags for exactly the given locales.

        Locales this resource does not have are skipped. Locales outside the
        set are not evaluated at all.

        Args:
            enabled_locales: Locales shown to the user.
            evaluation: Translatable-detection policy.
            keys: Restrict recomputation to these rows (all rows if None).

        Returns:
            Keys whose flags changed
        """
        evaluation = evaluation or RowEvaluationConfig()
        locales = tuple(l for l in enabled_locales if l in self._languages)
        full = keys is None or locales != self._evaluated_locales or evaluation != self._evaluation
        rows = self.keys() if full else [k for k in keys if k in self._base.entries]

        old_flags = self._flags if full else {k: self._flags.get(k, {}) for k in rows}
        new_flags: Dict[str, Dict[str, RowFlag]] = {}
        for key in rows:
            base_value = self._base.entries.get_value(key)
            new_flags[key] = {
                locale: evaluate_cell(base_value, self._languages[locale].entries.get_value(key), evaluation)
                for locale in locales
            }

        changed = [k for k in rows if old_flags.get(k) != new_flags[k]]
        if full:
            changed.extend(k for k in old_flags if k not in new_flags)
            self._flags = new_flags
        else:
            self._flags.update(new_flags)

        self._evaluated_locales = locales
        self._evaluation = evaluation
        return changed

    def get_row_flag(self, key: str, locale: str) -> Optional[RowFlag]:
        """Flag computed by the last evaluation, or None if the cell was not evaluated."""
        return self._flags.get(key, {}).get(locale)

    def get_row_flags(self, key: str) -> Dict[str, RowFlag]:
        return dict(self._flags.get(key, {}))

    def get_missing_keys(self, locale: str) -> List[str]:
        return [k for k in self.keys() if self.get_row_flag(k, locale) == RowFlag.MISSING]

    def row_has_missing(self, key: str) -> bool:
        return RowFlag.MISSING in self._flags.get(key, {}).values()

    def find_next_missing(self, locale: Optional[str] = None,
                          after_key: Optional[str] = None) -> Optional[Tuple[str, str]]:
        """
        Next (key, locale) flagged MISSING after a row, wrapping around.

        Args:
            locale: Only look at this locale (all evaluated locales if None).
            after_key: Start after this row (from the top if None).
        """
        keys = self.keys()
        start = keys.index(after_key) + 1 if after_key in self._base.entries else 0
        locales = [locale] if locale else list(self._evaluated_locales)
        for key in keys[start:] + keys[:start]:
            flags = self._flags.get(key, {})
            for loc in locales:
                if flags.get(loc) == RowFlag.MISSING:
                    return key, loc
        return None

    def count_missing(self, locale: str, evaluation: Optional[RowEvaluationConfig] = None) -> int:
        """
        Count missing cells of one language without touching the stored flags.

        A language the resource does not have counts every translatable row.
        """
        evaluation = evaluation or RowEvaluationConfig()
        holder = self._languages.get(locale)
        count = 0
        for entry in self._base.entries:
            value = holder.entries.get_value(entry.key) if holder else None
            if evaluate_cell(entry.value, value, evaluation) == RowFlag.MISSING:
                count += 1
        return count

    # =============================================================================
    # TRANSLATION EXTRACTION / WRITE-BACK
    # =============================================================================

    def get_text_for_translating(self, translate_config: TranslateConfig) -> List[str]:
        """
        Source texts to translate, in row order.

        Rows with a non-translatable base value or an empty source text are
        skipped. An empty list means nothing to do.
        """
        source = self._source_holder(translate_config)
        return [source.entries.get_value(key) for key in self._select_translation_keys(translate_config)]

    def get_keys_for_translating(self, translate_config: TranslateConfig) -> List[str]:
        """Keys matching get_text_for_translating(), position for position."""
        return self._select_translation_keys(translate_config)

    def set_translated_text(self, translate_config: TranslateConfig,
                            results: Sequence) -> List[str]:
        """
        Write translated results into the target language.

        Results align by position with get_text_for_translating() for the
        same config and unchanged state. Items may be TranslationResult or str.

        Returns:
            Keys written
        """
        keys = self._select_translation_keys(translate_config)
        if len(results) != len(keys):
            raise TranslationResultMismatchError(
                f"Expected {len(keys)} translated texts, got {len(results)}",
                expected=len(keys), actual=len(results),
                locale=translate_config.target_language)

        target = self._target_holder(translate_config)
        for key, result in zip(keys, results):
            text = result.translated_text if isinstance(result, TranslationResult) else result
            entry = target.entries.get(key)
            target.entries.set(key, text, entry.comment)

        logger.info(f"[{self._id}] {len(keys)} translated text(s) written to {target.locale}")
        if keys:
            self._after_rows_changed(keys)
        return keys

    def _select_translation_keys(self, translate_config: TranslateConfig) -> List[str]:
        source = self._source_holder(translate_config)
        target = self._target_holder(translate_config)
        evaluation = translate_config.evaluation
        scope = translate_config.scope

        if scope == TranslationScope.SELECTION:
            for key in translate_config.selected_keys:
                self._require_key(key)
            selected = set(translate_config.selected_keys)
            candidates = [k for k in self._base.entries.keys() if k in selected]
        else:
            candidates = self._base.entries.keys()

        keys = []
        for key in candidates:
            base_value = self._base.entries.get_value(key)
            if not evaluation.is_translatable(base_value):
                continue
            if not source.entries.get_value(key):
                continue
            target_value = target.entries.get_value(key)
            if scope == TranslationScope.ALL_MISSING and target_value is not None:
                continue
            if scope == TranslationScope.ALL_IDENTICAL and target_value != base_value:
                continue
            keys.append(key)
        return keys

    def _source_holder(self, translate_config: TranslateConfig) -> LanguageHolder:
        if translate_config.reads_from_base:
            return self._base
        return self._holder(translate_config.source_language)

    def _target_holder(self, translate_config: TranslateConfig) -> LanguageHolder:
        if translate_config.target_language == config.DEFAULT_LANGUAGE:
            raise LanguageNotFoundError("Translation target must be a language variant",
                                        locale=translate_config.target_language, resource=self._id)
        return self._holder(translate_config.target_language)

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def save(self):
        """Write every dirty file. Removed languages keep their files on disk."""
        for holder in [self._base] + [self._languages[l] for l in sorted(self._languages)]:
            if holder.is_dirty():
                holder.save()
        self._saved_languages = dict(self._languages)
        logger.info(f"Resource saved: {self._id}")
        self._update_dirty()

    def save_without_nontranslatable_data(self, evaluation: Optional[RowEvaluationConfig] = None) -> int:
        """
        Clear language values of non-translatable rows, then save.

        Cleared cells become None and are left out of the language files.

        Returns:
            Number of cells cleared
        """
        evaluation = evaluation or self._evaluation
        cleared_keys = []
        for key in self.keys():
            if evaluation.is_translatable(self._base.entries.get_value(key)):
                continue
            for holder in self._languages.values():
                entry = holder.entries.get(key)
                if entry.value is not None:
                    entry.value = None
                    cleared_keys.append(key)

        if cleared_keys:
            logger.info(f"[{self._id}] cleared {len(cleared_keys)} non-translatable cell(s)")
            self._notify('rows_changed', list(dict.fromkeys(cleared_keys)))
        self.save()
        return len(cleared_keys)

    def revert(self):
        """Restore the last loaded/saved state of every file and of the language set."""
        languages_changed = set(self._languages) != set(self._saved_languages)
        self._base.revert()
        self._languages = dict(self._saved_languages)
        for holder in self._languages.values():
            holder.revert()
        logger.info(f"Resource reverted: {self._id}")

        if languages_changed:
            self._notify('language_changed', self)
        if self._evaluated_locales or self._flags:
            self.evaluate_all_rows(self._evaluated_locales, self._evaluation)
        self._notify('rows_changed', self.keys())
        self._update_dirty()

    # =============================================================================
    # INTERNAL
    # =============================================================================

    def _holder(self, locale: Optional[str]) -> LanguageHolder:
        if locale is None or locale == config.DEFAULT_LANGUAGE:
            return self._base
        return self._languages[self._require_language(locale)]

    def _require_language(self, locale: str) -> str:
        if locale in self._languages:
            return locale
        try:
            normalized = normalize_locale(locale)
        except InvalidLocaleError:
            normalized = None
        if normalized not in self._languages:
            raise LanguageNotFoundError(f"Language not found: {locale}", locale=locale, resource=self._id)
        return normalized

    def _require_key(self, key: str):
        if key not in self._base.entries:
            raise KeyNotFoundError(f"Key not found: {key}", key=key, resource=self._id)

    def _mutate_all(self, action: Callable[[LanguageHolder], None]):
        """
        Apply a mutation to the base and every language, all or nothing.

        On any failure every entry set is restored and the error re-raised.
        """
        holders = [self._base] + list(self._languages.values())
        backups = [(holder, holder.entries.copy()) for holder in holders]
        try:
            for holder in holders:
                action(holder)
        except Exception:
            for holder, backup in backups:
                holder.replace_entries(backup)
            logger.warning(f"[{self._id}] mutation failed, all entry sets restored")
            raise

    def _after_rows_changed(self, keys: List[str]):
        self._notify('rows_changed', keys)
        self._update_dirty()

    def _update_dirty(self):
        dirty = self.is_dirty
        if dirty != self._last_dirty:
            self._last_dirty = dirty
            self._notify('dirty_changed', dirty)

    def __repr__(self) -> str:
        return f"ResourceHolder({self._id}, keys={len(self._base.entries)}, languages={self.locales})"
