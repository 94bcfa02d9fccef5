"""
ResxSync Enum Definitions

Type-safe enums for row evaluation flags and translation selection scopes.
"""

from enum import Enum


class RowFlag(str, Enum):
    """Translation state of one cell (key x language)."""
    DEFAULT = 'default'
    MISSING = 'missing'
    IDENTICAL = 'identical'
    NOT_TRANSLATABLE = 'not_translatable'


class TranslationScope(str, Enum):
    """Which rows a batch translation picks up."""
    SELECTION = 'selection'
    ALL_MISSING = 'all_missing'
    ALL_IDENTICAL = 'all_identical'


class LoadStage(str, Enum):
    """Stages reported while a project is being scanned."""
    DISCOVERING = 'discovering'
    LOADING = 'loading'
    DONE = 'done'


class SearchTarget(str, Enum):
    """Which part of a row a search looks at."""
    KEY = 'key'
    VALUE = 'value'
    COMMENT = 'comment'
    ANY = 'any'
