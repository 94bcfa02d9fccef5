# -*- coding: utf-8 -*-
"""
ResxSync Test Fixtures

Shared fixtures for all tests.
"""

import pytest
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Set
from xml.sax.saxutils import escape

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from interfaces.i_translation_engine import ITranslationEngine
from resxsync_models import TranslationResult


# =============================================================================
# FILE HELPERS
# =============================================================================

def make_resx(entries) -> str:
    """Build .resx text from (key, value[, comment]) tuples. A None value writes no <value>."""
    parts = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<root>',
        '  <resheader name="resmimetype"><value>text/microsoft-resx</value></resheader>',
        '  <resheader name="version"><value>2.0</value></resheader>',
    ]
    for entry in entries:
        key, value = entry[0], entry[1]
        comment = entry[2] if len(entry) > 2 else None
        parts.append(f'  <data name="{escape(key)}" xml:space="preserve">')
        if value is not None:
            parts.append(f'    <value>{escape(value)}</value>')
        if comment is not None:
            parts.append(f'    <comment>{escape(comment)}</comment>')
        parts.append('  </data>')
    parts.append('</root>')
    return '\n'.join(parts)


def write_resx(path: Path, entries) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(make_resx(entries), encoding='utf-8')
    return path


# =============================================================================
# PROJECT FIXTURES
# =============================================================================

@pytest.fixture
def resx_project(tmp_path) -> Path:
    """
    Temporary project tree:

    Strings.resx            Hello, Bye, Empty, Title
    Strings.fr-FR.resx      Hello (translated), Bye (identical to base)
    Strings.de.resx         Hello
    Forms/Main.resx         Caption
    Forms/Main.de.resx      Caption
    Only/Extra.fr.resx      no base file
    """
    root = tmp_path / "project"
    write_resx(root / "Strings.resx", [
        ("Hello", "Hello", "Greeting"),
        ("Bye", "Goodbye"),
        ("Empty", ""),
        ("Title", "[Main title]"),
    ])
    write_resx(root / "Strings.fr-FR.resx", [
        ("Hello", "Bonjour"),
        ("Bye", "Goodbye"),
    ])
    write_resx(root / "Strings.de.resx", [
        ("Hello", "Hallo"),
    ])
    write_resx(root / "Forms" / "Main.resx", [
        ("Caption", "Main window"),
    ])
    write_resx(root / "Forms" / "Main.de.resx", [
        ("Caption", "Hauptfenster"),
    ])
    write_resx(root / "Only" / "Extra.fr.resx", [
        ("One", "Un"),
        ("Two", "Deux"),
    ])
    return root


@pytest.fixture
def file_format():
    from core.resx_format import ResxFileFormat
    return ResxFileFormat()


@pytest.fixture
def strings_holder(resx_project, file_format):
    """ResourceHolder for Strings.resx of the temporary project."""
    from core.resource_discovery import discover_resources
    from models.resource_holder import ResourceHolder
    group = next(g for g in discover_resources(resx_project) if g.resource_id == "Strings")
    return ResourceHolder.from_group(group, file_format)


@pytest.fixture
def loader(resx_project):
    """ResourceLoader with the temporary project opened."""
    from models.resource_loader import ResourceLoader
    resource_loader = ResourceLoader()
    resource_loader.open_project(resx_project)
    return resource_loader


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

class FakeEngine(ITranslationEngine):
    """Engine returning '<target>:<text>', recording every call."""

    def __init__(self, languages: Optional[Set[str]] = None, fail_on_calls: Sequence[int] = ()):
        self.languages = set(languages) if languages is not None else {"en", "fr", "de", "es", "zh-CN"}
        self.fail_on_calls = set(fail_on_calls)
        self.calls: List[tuple] = []
        self.language_requests = 0

    @property
    def id(self) -> str:
        return "test.engine.fake"

    @property
    def name(self) -> str:
        return "Fake Engine"

    def get_supported_languages(self) -> Set[str]:
        self.language_requests += 1
        return set(self.languages)

    def translate_batch(self, texts, source_lang, target_lang):
        self.calls.append((list(texts), source_lang, target_lang))
        if len(self.calls) in self.fail_on_calls:
            raise ConnectionError(f"quota exceeded on call {len(self.calls)}")
        return [TranslationResult(f"{target_lang}:{text}", source_lang) for text in texts]


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def recorded_sleep():
    """Sleep replacement recording requested delays."""
    class Recorder:
        def __init__(self):
            self.delays = []

        def __call__(self, seconds):
            self.delays.append(seconds)

    return Recorder()
