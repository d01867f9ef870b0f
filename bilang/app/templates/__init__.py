"""
Markup generation for bilang

- ContentRenderer: restricted markdown for translated post bodies
- SnippetRenderer: Jinja2 snippets such as the locale-change toast
"""

from .converters import ContentRenderer, slugify
from .engine import Notification, SnippetRenderer

__all__ = [
    'ContentRenderer',
    'Notification',
    'SnippetRenderer',
    'slugify',
]
