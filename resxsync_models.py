"""
ResxSync Data Models

This module defines the value types shared by the engine: resource entries,
flag-evaluation and translation configurations, translation results, load
progress reports and search parameters.
"""

from dataclasses import dataclass, field
from typing import List, Optional, FrozenSet, Tuple

import resxsync_config as config
from resxsync_enums import TranslationScope, LoadStage, SearchTarget


@dataclass
class ResourceEntry:
    """
    A single key of one language of one resource.

    Attributes:
        key (str): Resource key, case-sensitive.
        value (Optional[str]): None means "not yet populated", "" means intentionally blank.
        comment (Optional[str]): Free-form translator comment.
    """
    key: str
    value: Optional[str] = None
    comment: Optional[str] = None

    def copy(self) -> 'ResourceEntry':
        return ResourceEntry(self.key, self.value, self.comment)


@dataclass(frozen=True)
class RowEvaluationConfig:
    """
    Policy used when computing row flags.

    Attributes:
        translatable_in_brackets (bool): Only base values wrapped in the bracket
            markers are considered translatable.
        bracket_open (str): Opening marker.
        bracket_close (str): Closing marker.
    """
    translatable_in_brackets: bool = False
    bracket_open: str = config.TRANSLATABLE_BRACKET_OPEN
    bracket_close: str = config.TRANSLATABLE_BRACKET_CLOSE

    def is_translatable(self, base_value: Optional[str]) -> bool:
        """Return True if a base value should be translated at all."""
        if not base_value:
            return False
        if self.translatable_in_brackets:
            stripped = base_value.strip()
            return (len(stripped) >= len(self.bracket_open) + len(self.bracket_close)
                    and stripped.startswith(self.bracket_open)
                    and stripped.endswith(self.bracket_close))
        return True


@dataclass
class TranslateConfig:
    """
    What a batch translation should do.

    Attributes:
        source_language (str): Locale to read from, or DEFAULT_LANGUAGE for the base resource.
        target_language (str): Locale whose cells receive the results.
        scope (TranslationScope): Which rows to pick up.
        default_language (str): Language code the base resource is written in.
        selected_keys (Tuple[str, ...]): Keys for the SELECTION scope.
        evaluation (RowEvaluationConfig): Translatable-detection policy.
    """
    source_language: str
    target_language: str
    scope: TranslationScope = TranslationScope.ALL_MISSING
    default_language: str = config.DEFAULT_BASE_LANGUAGE
    selected_keys: Tuple[str, ...] = ()
    evaluation: RowEvaluationConfig = field(default_factory=RowEvaluationConfig)

    @property
    def reads_from_base(self) -> bool:
        return self.source_language == config.DEFAULT_LANGUAGE

    @property
    def provider_source_language(self) -> str:
        """Source language code as sent to the engine."""
        return self.default_language if self.reads_from_base else self.source_language

    @property
    def provider_target_language(self) -> str:
        """Target language code as sent to the engine."""
        if self.target_language == config.DEFAULT_LANGUAGE:
            return self.default_language
        return self.target_language


@dataclass(frozen=True)
class TranslationResult:
    """One translated text and the source language the engine reported."""
    translated_text: str
    detected_source_language: Optional[str] = None


@dataclass
class LanguageSupportReport:
    """
    Outcome of checking locales against an engine's language list.

    Attributes:
        supported (List[str]): Locales that will be translated.
        unsupported (List): UnsupportedLanguageError for every excluded locale.
    """
    supported: List[str] = field(default_factory=list)
    unsupported: List = field(default_factory=list)

    @property
    def unsupported_locales(self) -> FrozenSet[str]:
        return frozenset(e.locale for e in self.unsupported)


@dataclass(frozen=True)
class LoadProgress:
    """Progress report emitted while a project is being opened."""
    stage: LoadStage
    message: str
    file_name: Optional[str] = None
    current: int = 0
    total: int = 0

    @property
    def is_done(self) -> bool:
        return self.stage == LoadStage.DONE


@dataclass(frozen=True)
class MissingTranslation:
    """One (resource, locale) pair with untranslated cells."""
    resource_id: str
    locale: str
    missing_count: int
    language_exists: bool = True


@dataclass(frozen=True)
class SearchParams:
    """
    What to look for across the opened resources.

    Attributes:
        text (str): Substring, or a regular expression when use_regex is set.
        match_case (bool): Case-sensitive comparison.
        use_regex (bool): Treat text as a regular expression.
        target (SearchTarget): Keys, values, comments or all of them.
        locales (Optional[Tuple[str, ...]]): Languages whose values/comments are
            searched (DEFAULT_LANGUAGE for the base); all when None.
    """
    text: str
    match_case: bool = False
    use_regex: bool = False
    target: SearchTarget = SearchTarget.ANY
    locales: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class SearchMatch:
    """One matching cell. locale is None for key matches and base cells."""
    resource_id: str
    key: str
    locale: Optional[str]
    target: SearchTarget
    text: str
