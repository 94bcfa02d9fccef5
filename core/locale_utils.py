"""
Culture tag helpers.

Locale identifiers are normalized the way .NET culture names are written:
lower-case language, title-case script, upper-case territory, '-' separated.
"""

from functools import lru_cache
from typing import Optional

from babel import Locale, UnknownLocaleError

from resxsync_exceptions import InvalidLocaleError


@lru_cache(maxsize=512)
def _parse(tag: str) -> Optional[Locale]:
    try:
        return Locale.parse(tag.replace("_", "-"), sep="-")
    except (ValueError, TypeError, UnknownLocaleError):
        return None


def is_culture_tag(tag: str) -> bool:
    """True if the string names a known culture ("fr", "fr-FR", "zh-Hans")."""
    return bool(tag) and _parse(tag) is not None


def normalize_locale(tag: str) -> str:
    """
    Return the canonical form of a culture tag.

    Raises:
        InvalidLocaleError: If the tag is not a known culture.
    """
    locale = _parse(tag) if tag else None
    if locale is None:
        raise InvalidLocaleError(f"Not a valid culture tag: {tag!r}", locale=tag)
    parts = [locale.language, locale.script, locale.territory, locale.variant]
    return "-".join(p for p in parts if p)


def neutral_language(tag: str) -> str:
    """Language subtag of a culture tag ("fr-FR" -> "fr")."""
    return tag.split("-", 1)[0].lower()


def display_name(tag: str) -> str:
    """English display name of a culture, falling back to the tag itself."""
    locale = _parse(tag)
    if locale is None:
        return tag
    return locale.get_display_name("en") or tag
