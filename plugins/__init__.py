# -*- coding: utf-8 -*-
"""
ResxSync Translation Engines

Built-in engines:
- Google Translate through deep-translator
- A prefixing dummy engine for offline use and tests
"""

from plugins.built_in.dummy_engine import DummyEngine
from plugins.built_in.google_translator import GoogleTranslateEngine

__all__ = [
    'DummyEngine',
    'GoogleTranslateEngine',
]
