# -*- coding: utf-8 -*-
"""
ResxSync Interfaces Package

Abstract base classes implemented by pluggable collaborators.
"""

from interfaces.i_translation_engine import ITranslationEngine, TRANSLATION_ENGINE_API_VERSION

__all__ = [
    'ITranslationEngine',
    'TRANSLATION_ENGINE_API_VERSION',
]
