# -*- coding: utf-8 -*-
"""
ResxSync Models Package

This package contains the resource models: entry sets, language holders,
resource holders and the project-level resource loader.
"""

from models.entry_set import ResourceEntrySet
from models.language_holder import LanguageHolder
from models.resource_holder import ResourceHolder
from models.resource_loader import ResourceLoader

__all__ = ['ResourceEntrySet', 'LanguageHolder', 'ResourceHolder', 'ResourceLoader']
