"""
Parsed page document.

Owns the element tree of one rendered page together with the bits of
browser state the language toggle needs: current path, navigation target,
click listeners and transient notifications.
"""
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag

from ..lang.state import Locale, LocaleCodes
from ..utils.logger import get_logger

logger = get_logger("dom.document")

PARSER = "html.parser"


def parse_fragment(markup: str) -> List:
    """Parse an HTML fragment into detached nodes."""
    return list(BeautifulSoup(markup, PARSER).contents)


def replace_inner_html(tag: Tag, markup: str) -> None:
    tag.clear()
    for node in parse_fragment(markup):
        tag.append(node.extract())


def direct_strings(tag: Tag) -> List[NavigableString]:
    """Text nodes that are immediate children of ``tag`` (comments excluded)."""
    return [child for child in tag.children if type(child) is NavigableString]


class PageDocument:
    """One loaded page and its window-level state."""

    def __init__(self, markup: str, path: str = "/", layout: Optional[str] = None):
        self.soup = BeautifulSoup(markup, PARSER)
        self.path = path
        self.location = path
        self.layout = layout if layout is not None else self._detect_layout()
        self.notifications: List = []
        self._listeners: Dict[Tuple[str, str], Dict[str, Callable[[], None]]] = {}

    def _detect_layout(self) -> Optional[str]:
        meta = self.soup.find("meta", attrs={"name": "layout"})
        if meta is not None and meta.get("content"):
            return meta["content"]
        tagged = self.soup.select_one("[data-layout]")
        if tagged is not None:
            return tagged.get("data-layout")
        return None

    @property
    def is_post(self) -> bool:
        """True for dedicated per-locale documents."""
        return self.layout == "post"

    @property
    def navigated(self) -> bool:
        return self.location != self.path

    def default_locale(self, codes: LocaleCodes) -> Locale:
        """Locale the document was rendered in, from ``<html lang>``."""
        html_tag = self.soup.find("html")
        lang = html_tag.get("lang") if html_tag is not None else None
        return codes.parse_lang(lang) or Locale.PRIMARY

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def get_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def navigate(self, path: str) -> None:
        logger.info(f"Navigating to {path}")
        self.location = path

    def add_listener(self, element_id: str, event: str, key: str,
                     handler: Callable[[], None]) -> bool:
        """
        Attach a handler to an element.

        A handler registered again under the same key replaces the previous
        one, so repeated binding never doubles the invocations.

        Returns:
            False when the element does not exist
        """
        if self.get_by_id(element_id) is None:
            return False
        self._listeners.setdefault((element_id, event), {})[key] = handler
        return True

    def dispatch(self, element_id: str, event: str = "click") -> int:
        """Run the handlers bound to an element; returns how many ran."""
        handlers = list(self._listeners.get((element_id, event), {}).values())
        for handler in handlers:
            handler()
        return len(handlers)

    def click(self, element_id: str) -> int:
        return self.dispatch(element_id, "click")

    def render(self) -> str:
        return str(self.soup)
