# -*- coding: utf-8 -*-
"""
Unit Tests for SearchManager
"""

import pytest

import resxsync_config as config
from core.search_manager import SearchManager, build_matcher
from resxsync_enums import SearchTarget
from resxsync_models import SearchParams
from resxsync_exceptions import SearchPatternError


@pytest.fixture
def search_manager():
    return SearchManager()


class TestMatcher:
    """Tests for building match predicates."""

    def test_case_insensitive_by_default(self):
        assert build_matcher(SearchParams("HELLO"))("say hello")

    def test_match_case(self):
        assert not build_matcher(SearchParams("HELLO", match_case=True))("say hello")

    def test_regex(self):
        matcher = build_matcher(SearchParams(r"^\d+$", use_regex=True))
        assert matcher("123")
        assert not matcher("12a")

    def test_invalid_regex(self):
        with pytest.raises(SearchPatternError):
            build_matcher(SearchParams("(", use_regex=True))

    def test_empty_text(self):
        with pytest.raises(SearchPatternError):
            build_matcher(SearchParams(""))


class TestSearch:
    """Tests for searching resource holders."""

    def test_comments(self, search_manager, strings_holder):
        matches = search_manager.search([strings_holder], SearchParams("greet", target=SearchTarget.COMMENT))
        assert [(m.key, m.locale, m.target) for m in matches] == [("Hello", None, SearchTarget.COMMENT)]

    def test_locale_filter(self, search_manager, strings_holder):
        """Only the listed columns are searched."""
        params = SearchParams("goodbye", target=SearchTarget.VALUE, locales=("fr-FR",))
        matches = search_manager.search([strings_holder], params)
        assert [(m.key, m.locale) for m in matches] == [("Bye", "fr-FR")]

        params = SearchParams("goodbye", target=SearchTarget.VALUE, locales=(config.DEFAULT_LANGUAGE,))
        matches = search_manager.search([strings_holder], params)
        assert [(m.key, m.locale) for m in matches] == [("Bye", None)]

    def test_find_next_wraps(self, search_manager, strings_holder):
        params = SearchParams("h", target=SearchTarget.KEY)

        first = search_manager.find_next(strings_holder, params)
        second = search_manager.find_next(strings_holder, params, after_key=first.key)

        assert first.key == "Hello"
        # Only "Hello" contains an h, so the search wraps back to it
        assert second.key == "Hello"

    def test_find_prev(self, search_manager, strings_holder):
        params = SearchParams("e", target=SearchTarget.KEY)
        match = search_manager.find_prev(strings_holder, params, after_key="Hello")
        assert match.key == "Title"

    def test_not_found(self, search_manager, strings_holder):
        assert search_manager.find_next(strings_holder, SearchParams("zzz")) is None
