# -*- coding: utf-8 -*-
"""
ResxSync Exceptions Module
Custom exception classes for structured error handling across the engine.
"""


class ResxSyncError(Exception):
    """
    Base exception class for all ResxSync-related errors.

    Attributes:
        message: Human-readable error message
        details: Optional additional details (dict, string, etc.)
    """

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Key Exceptions
# =============================================================================

class ResourceKeyError(ResxSyncError):
    """Base exception for resource key errors."""

    def __init__(self, message: str, key: str = None, resource: str = None):
        super().__init__(message, details={'key': key, 'resource': resource})
        self.key = key
        self.resource = resource


class DuplicateKeyError(ResourceKeyError):
    """Raised when a key is added or renamed onto a key that already exists."""
    pass


class KeyNotFoundError(ResourceKeyError):
    """Raised when an operation targets a key that does not exist."""
    pass


# =============================================================================
# Language Exceptions
# =============================================================================

class LanguageError(ResxSyncError):
    """Base exception for language variant errors."""

    def __init__(self, message: str, locale: str = None, resource: str = None):
        super().__init__(message, details={'locale': locale, 'resource': resource})
        self.locale = locale
        self.resource = resource


class LanguageAlreadyExistsError(LanguageError):
    """Raised when adding a language the resource already has."""
    pass


class LanguageNotFoundError(LanguageError):
    """Raised when an operation targets a language the resource does not have."""
    pass


class InvalidLocaleError(LanguageError):
    """Raised when a string cannot be parsed as a culture tag."""
    pass


# =============================================================================
# Translation Exceptions
# =============================================================================

class TranslationError(ResxSyncError):
    """Base exception for batch translation errors."""
    pass


class TranslationResultMismatchError(TranslationError):
    """Raised when the number of translated results differs from the number of requested texts."""

    def __init__(self, message: str, expected: int = None, actual: int = None, locale: str = None):
        super().__init__(message, details={'expected': expected, 'actual': actual, 'locale': locale})
        self.expected = expected
        self.actual = actual
        self.locale = locale


class UnsupportedLanguageError(TranslationError):
    """
    Raised (or reported) when a language is not supported by the translation engine.

    Locales excluded from a run are reported as instances of this class
    rather than raised.
    """

    def __init__(self, message: str, locale: str = None, engine: str = None):
        super().__init__(message, details={'locale': locale, 'engine': engine})
        self.locale = locale
        self.engine = engine


class ProviderCallFailedError(TranslationError):
    """Wraps a transport, auth or quota failure of one chunk call."""

    def __init__(self, message: str, chunk_index: int = None, offset: int = None,
                 size: int = None, cause: Exception = None):
        super().__init__(message, details={'chunk': chunk_index, 'offset': offset, 'size': size})
        self.chunk_index = chunk_index
        self.offset = offset
        self.size = size
        self.cause = cause


# =============================================================================
# Project/File Exceptions
# =============================================================================

class ProjectError(ResxSyncError):
    """Base exception for project and file errors."""
    pass


class DirectoryNotFoundError(ProjectError):
    """Raised when a project path does not exist or is not a directory."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message, details={'path': path})
        self.path = path


class UnsavedChangesError(ProjectError):
    """Raised when a state-destroying call is made while resources have unsaved changes."""

    def __init__(self, message: str, resources=None):
        super().__init__(message, details={'resources': resources})
        self.resources = resources or []


class FileOperationError(ProjectError):
    """Raised when a resource file read or write fails."""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        super().__init__(message, details={'file_path': file_path, 'operation': operation})
        self.file_path = file_path
        self.operation = operation


class SaveError(ProjectError):
    """Raised when saving a resource fails."""

    def __init__(self, message: str, resource: str = None, file_path: str = None):
        super().__init__(message, details={'resource': resource, 'file_path': file_path})
        self.resource = resource
        self.file_path = file_path



# =============================================================================
# Search Exceptions
# =============================================================================

class SearchPatternError(ResxSyncError):
    """Raised when a regular expression search pattern does not compile."""

    def __init__(self, message: str, pattern: str = None):
        super().__init__(message, details={'pattern': pattern})
        self.pattern = pattern
