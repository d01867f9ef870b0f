"""
Translation data for bilang: dictionaries, the route table and
per-document payloads
"""

from .dictionary import Dictionaries, load_dictionaries
from .payload import TranslationPayload
from .routes import RouteMap

__all__ = ['Dictionaries', 'RouteMap', 'TranslationPayload', 'load_dictionaries']
