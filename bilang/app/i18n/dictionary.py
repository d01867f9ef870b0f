"""
Translation dictionaries used by the DOM translation engine
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..exceptions import DictionaryError
from ..utils.logger import get_logger
from .routes import RouteMap

logger = get_logger("i18n.dictionary")

DEFAULT_DICTIONARY_FILE = Path(__file__).parent / 'data' / 'dictionary.json'

TABLES = ('ui', 'tags', 'titles', 'descriptions', 'links')


def _frozen(mapping: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Dictionaries:
    """
    Immutable lookup tables from primary-locale text to secondary-locale text.

    Each engine gets its own instance, so pages and tests never share
    mutable translation state.
    """

    ui: Mapping[str, str] = field(default_factory=dict)
    tags: Mapping[str, str] = field(default_factory=dict)
    titles: Mapping[str, str] = field(default_factory=dict)
    descriptions: Mapping[str, str] = field(default_factory=dict)
    links: Mapping[str, str] = field(default_factory=dict)
    phrases: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        for name in TABLES:
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        object.__setattr__(self, 'phrases', tuple((src, dst) for src, dst in self.phrases))

    def table(self, name: str) -> Mapping[str, str]:
        if name not in TABLES:
            raise DictionaryError(f"Unknown dictionary table: {name}")
        return getattr(self, name)

    def lookup(self, name: str, text: str) -> Optional[str]:
        """Whole-string lookup of stripped text in one table."""
        return self.table(name).get(text.strip())

    def translate_phrases(self, text: str) -> Optional[str]:
        """
        Ordered substring replacement over the phrase table.

        Phrases are tried in table order and every occurrence of a present
        phrase is replaced, so when two phrases overlap the one listed first
        wins. Returns None when no phrase occurs in the text.
        """
        matched = False
        for source, target in self.phrases:
            if source and source in text:
                text = text.replace(source, target)
                matched = True
        return text if matched else None


def load_dictionaries(
    path: Optional[str | Path] = None,
    route_map: Optional[RouteMap] = None,
) -> Dictionaries:
    """
    Load dictionaries from JSON

    Args:
        path: Dictionary file, the packaged one when omitted
        route_map: Route table whose pairs become the ``links`` table

    Returns:
        A new Dictionaries instance
    """
    dictionary_file = Path(path) if path else DEFAULT_DICTIONARY_FILE
    try:
        with open(dictionary_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DictionaryError(f"Cannot load dictionary {dictionary_file}: {e}") from e

    if not isinstance(data, dict):
        raise DictionaryError(f"Dictionary {dictionary_file} must be a JSON object")

    tables = {}
    for name in ('ui', 'tags', 'titles', 'descriptions'):
        table = data.get(name, {})
        if not isinstance(table, dict):
            raise DictionaryError(f"Table '{name}' in {dictionary_file} must be an object")
        tables[name] = table

    phrases = []
    for entry in data.get('phrases', []):
        if not (isinstance(entry, list) and len(entry) == 2):
            raise DictionaryError(f"Malformed phrase entry in {dictionary_file}: {entry!r}")
        phrases.append((entry[0], entry[1]))

    links = dict(route_map.pairs) if route_map is not None else dict(data.get('links', {}))

    dictionaries = Dictionaries(links=links, phrases=tuple(phrases), **tables)
    logger.info(
        f"Loaded dictionaries: {len(dictionaries.ui)} ui, {len(dictionaries.tags)} tags, "
        f"{len(dictionaries.titles)} titles, {len(dictionaries.phrases)} phrases"
    )
    return dictionaries
