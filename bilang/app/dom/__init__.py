"""
Page document model and the in-place translation engine
"""

from .document import PageDocument
from .engine import DomTranslationEngine
from .regions import DEFAULT_REGIONS, Region

__all__ = ['DEFAULT_REGIONS', 'DomTranslationEngine', 'PageDocument', 'Region']
