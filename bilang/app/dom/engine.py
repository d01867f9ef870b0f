"""
In-place translation of a rendered page.

The engine walks the configured regions and rewrites text nodes and
attributes from the dictionaries. The first time a node changes, its
original value is stashed on the element in a ``data-original-*``
attribute; switching back to the primary locale restores that value and
removes the stash, leaving the markup exactly as it was rendered.
"""
import json
from typing import Iterable, List, Optional

from bs4 import Tag

from ..i18n.dictionary import Dictionaries
from ..lang.state import Locale
from ..utils.logger import get_logger
from .document import PageDocument, direct_strings
from .regions import DEFAULT_REGIONS, Region

logger = get_logger("dom.engine")

TEXT_CACHE = "data-original-text"


def attribute_cache(attribute: str) -> str:
    return f"data-original-{attribute}"


def _keep_whitespace(source: str, translated: str) -> str:
    """Carry the leading and trailing whitespace of ``source`` over."""
    stripped = source.strip()
    if not stripped:
        return translated
    start = source.index(stripped)
    return source[:start] + translated + source[start + len(stripped):]


class DomTranslationEngine:
    """Rewrites the regions of one page document between the two locales."""

    def __init__(
        self,
        document: PageDocument,
        dictionaries: Dictionaries,
        regions: Iterable[Region] = DEFAULT_REGIONS,
    ):
        self.document = document
        self.dictionaries = dictionaries
        self.regions = tuple(regions)

    def apply(self, locale: Locale) -> int:
        """
        Translate every region to ``locale``

        Args:
            locale: Target locale

        Returns:
            Number of text nodes and attributes that changed
        """
        changed = 0
        for region in self.regions:
            elements = self.document.select(region.selector)
            if not elements:
                logger.debug(f"Region '{region.name}' not present, skipping")
                continue

            region_changed = 0
            for element in elements:
                if region.is_attribute:
                    region_changed += self._apply_attribute(element, region, locale)
                else:
                    region_changed += self._apply_text(element, region, locale)

            if region_changed:
                logger.debug(f"Region '{region.name}': {region_changed} node(s) changed")
            changed += region_changed

        logger.info(f"Applied {locale.value} translations: {changed} change(s)")
        return changed

    def translate_text(self, region: Region, source: str) -> Optional[str]:
        """
        Look up one value for a region

        Whole-string match first; regions that allow it then fall back to
        the ordered phrase table. Returns None when nothing matched.
        """
        stripped = source.strip()
        if not stripped:
            return None

        translated = self.dictionaries.lookup(region.table, stripped)
        if translated is None and region.phrase_fallback:
            translated = self.dictionaries.translate_phrases(stripped)
        if translated is None:
            return None

        return _keep_whitespace(source, translated)

    def _apply_text(self, element: Tag, region: Region, locale: Locale) -> int:
        strings = direct_strings(element)
        cached = self._cached_strings(element)

        if locale is Locale.PRIMARY:
            if cached is None:
                return 0
            del element[TEXT_CACHE]
            restored = 0
            for node, original in zip(strings, cached):
                if str(node) != original:
                    node.replace_with(original)
                    restored += 1
            return restored

        current = [str(node) for node in strings]
        sources = cached if cached is not None and len(cached) == len(current) else current

        changed = 0
        for node, source, value in zip(strings, sources, current):
            translated = self.translate_text(region, source)
            if translated is None or translated == value:
                continue
            if TEXT_CACHE not in element.attrs:
                element[TEXT_CACHE] = json.dumps(current, ensure_ascii=False)
            node.replace_with(translated)
            changed += 1
        return changed

    def _apply_attribute(self, element: Tag, region: Region, locale: Locale) -> int:
        attribute = region.attribute
        cache_key = attribute_cache(attribute)

        if locale is Locale.PRIMARY:
            if cache_key not in element.attrs:
                return 0
            original = element[cache_key]
            del element[cache_key]
            if element.get(attribute) == original:
                return 0
            element[attribute] = original
            return 1

        current = element.get(attribute)
        if current is None:
            return 0

        translated = self.translate_text(region, element.get(cache_key, current))
        if translated is None or translated == current:
            return 0

        if cache_key not in element.attrs:
            element[cache_key] = current
        element[attribute] = translated
        return 1

    def _cached_strings(self, element: Tag) -> Optional[List[str]]:
        raw = element.get(TEXT_CACHE)
        if raw is None:
            return None
        try:
            cached = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable {TEXT_CACHE} on <{element.name}>")
            del element[TEXT_CACHE]
            return None
        if not isinstance(cached, list):
            del element[TEXT_CACHE]
            return None
        return [str(value) for value in cached]
