import re
from typing import Callable, Iterable, List, Optional, Tuple

import resxsync_config as config
from resxsync_enums import SearchTarget
from resxsync_exceptions import SearchPatternError
from resxsync_models import SearchMatch, SearchParams
from resxsync_logger import get_logger

logger = get_logger("core.search_manager")


def build_matcher(params: SearchParams) -> Callable[[str], bool]:
    """Return a predicate testing one cell text against the search parameters."""
    if not params.text:
        raise SearchPatternError("Search text is empty", pattern=params.text)

    if params.use_regex:
        flags = 0 if params.match_case else re.IGNORECASE
        try:
            pattern = re.compile(params.text, flags)
        except re.error as e:
            raise SearchPatternError(f"Invalid regular expression: {e}", pattern=params.text) from e
        return lambda text: pattern.search(text) is not None

    if params.match_case:
        return lambda text: params.text in text
    needle = params.text.lower()
    return lambda text: needle in text.lower()


class SearchManager:
    """Finds keys, values and comments across resource holders."""

    def search(self, resources: Iterable, params: SearchParams) -> List[SearchMatch]:
        """All matches in row order, resource by resource."""
        matcher = build_matcher(params)
        matches = []
        for holder in resources:
            for key in holder.keys():
                matches.extend(self._match_row(holder, key, params, matcher))
        logger.debug(f"Search '{params.text}' found {len(matches)} match(es)")
        return matches

    def find_next(self, holder, params: SearchParams, after_key: Optional[str] = None) -> Optional[SearchMatch]:
        return self._find_impl(holder, params, after_key, forward=True)

    def find_prev(self, holder, params: SearchParams, after_key: Optional[str] = None) -> Optional[SearchMatch]:
        return self._find_impl(holder, params, after_key, forward=False)

    def _find_impl(self, holder, params: SearchParams, after_key: Optional[str],
                   forward: bool) -> Optional[SearchMatch]:
        matcher = build_matcher(params)
        keys = holder.keys()
        if not keys:
            return None

        # Forward: start -> end, then 0 -> start
        # Backward: start -> 0, then end -> start
        if after_key in keys:
            current = keys.index(after_key)
            start = (current + (1 if forward else -1)) % len(keys)
        else:
            start = 0 if forward else len(keys) - 1

        if forward:
            order = keys[start:] + keys[:start]
        else:
            order = keys[start::-1] + keys[:start:-1]

        for key in order:
            found = self._match_row(holder, key, params, matcher)
            if found:
                return found[0]
        return None

    def _match_row(self, holder, key: str, params: SearchParams, matcher) -> List[SearchMatch]:
        matches = []
        if params.target in (SearchTarget.KEY, SearchTarget.ANY) and matcher(key):
            matches.append(SearchMatch(holder.id, key, None, SearchTarget.KEY, key))

        for locale, language in self._columns(holder, params):
            entry = language.entries.get(key)
            if entry is None:
                continue
            for target, text in ((SearchTarget.VALUE, entry.value), (SearchTarget.COMMENT, entry.comment)):
                if params.target not in (target, SearchTarget.ANY) or not text:
                    continue
                if matcher(text):
                    matches.append(SearchMatch(holder.id, key, locale, target, text))
        return matches

    @staticmethod
    def _columns(holder, params: SearchParams) -> List[Tuple[Optional[str], object]]:
        if params.target == SearchTarget.KEY:
            return []
        columns = [(None, holder.base)] + list(holder.languages.items())
        if params.locales is None:
            return columns
        wanted = set(params.locales)
        return [(locale, language) for locale, language in columns
                if (locale or config.DEFAULT_LANGUAGE) in wanted]
