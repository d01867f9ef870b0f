"""
Locale state, resolution and persistence for bilang
"""

from .resolver import LocaleResolver
from .state import Locale, LocaleCodes
from .store import LocaleStore

__all__ = ['Locale', 'LocaleCodes', 'LocaleResolver', 'LocaleStore']
