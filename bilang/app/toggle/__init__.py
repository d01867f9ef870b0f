"""
Locale toggle state machine
"""

from .controller import LanguageChange, ToggleController, decide_language_change

__all__ = ['LanguageChange', 'ToggleController', 'decide_language_change']
