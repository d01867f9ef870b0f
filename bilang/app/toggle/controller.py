"""
Language toggle controller.

Drives the locale state machine of one loaded page: resolves the locale
on load, flips it on click, persists the choice and then either redirects
to the dedicated document of the other locale or translates the current
page in place.
"""
from dataclasses import dataclass
from typing import Optional

from ..dom.document import PageDocument, replace_inner_html
from ..dom.engine import DomTranslationEngine
from ..exceptions import PayloadError, StorageError
from ..i18n.dictionary import load_dictionaries
from ..i18n.payload import TranslationPayload
from ..i18n.routes import RouteMap
from ..lang.resolver import LocaleResolver
from ..lang.state import Locale, LocaleCodes
from ..lang.store import LocaleStore
from ..storage.backends import MemoryStorage, create_storage
from ..templates.converters import ContentRenderer
from ..templates.engine import SnippetRenderer
from ..utils.config import Config, get_config
from ..utils.logger import get_logger

logger = get_logger("toggle.controller")

HTML_CACHE = "data-original-html"


@dataclass(frozen=True)
class LanguageChange:
    """Outcome of a locale change: a redirect target or in-place translation."""

    locale: Locale
    redirect_to: Optional[str] = None

    @property
    def in_place(self) -> bool:
        return self.redirect_to is None


def decide_language_change(
    path: str,
    locale: Locale,
    route_map: RouteMap,
    is_post: bool,
) -> LanguageChange:
    """
    Choose between redirecting and translating in place.

    A redirect happens only for dedicated post documents whose path has a
    counterpart in the route table; every other case, including a post
    missing from the table, translates the current page.
    """
    if is_post:
        target = route_map.translate(path, locale)
        if target is not None and target != path:
            return LanguageChange(locale=locale, redirect_to=target)
    return LanguageChange(locale=locale)


def load_payload(document: PageDocument, selector: str) -> Optional[TranslationPayload]:
    """Read the embedded translation payload; None when absent or malformed."""
    script = document.select_one(selector)
    if script is None:
        logger.debug("No translation payload on this page")
        return None

    raw = script.string or script.get_text()
    if not raw.strip():
        logger.debug("Empty translation payload on this page")
        return None

    try:
        return TranslationPayload.parse(raw)
    except PayloadError as e:
        logger.warning(f"Skipping content translation, payload unusable: {e}")
        return None


class ToggleController:
    """Locale state machine bound to one page document."""

    def __init__(
        self,
        document: PageDocument,
        store: LocaleStore,
        resolver: LocaleResolver,
        route_map: RouteMap,
        engine: DomTranslationEngine,
        renderer: Optional[ContentRenderer] = None,
        snippets: Optional[SnippetRenderer] = None,
        config: Optional[Config] = None,
    ):
        self.document = document
        self.store = store
        self.resolver = resolver
        self.route_map = route_map
        self.engine = engine
        self.renderer = renderer or ContentRenderer()
        self.snippets = snippets or SnippetRenderer()
        self.config = config or get_config()
        self.codes: LocaleCodes = resolver.codes

        self.payload = load_payload(document, self.config.page.payload_selector)
        self.default_locale = document.default_locale(self.codes)
        self.locale: Optional[Locale] = None

    @classmethod
    def create(
        cls,
        document: PageDocument,
        config: Optional[Config] = None,
        storage=None,
    ) -> "ToggleController":
        """Wire a controller and its collaborators from configuration."""
        config = config or get_config()
        codes = LocaleCodes.from_config(config.locale)

        if storage is None:
            try:
                storage = create_storage(config.storage)
            except StorageError as e:
                logger.warning(f"Preference storage unavailable, using memory: {e}")
                storage = MemoryStorage()

        route_map = RouteMap.load(config.data.routes_path)
        dictionaries = load_dictionaries(config.data.dictionary_path, route_map=route_map)

        return cls(
            document=document,
            store=LocaleStore(storage, codes=codes, key=config.locale.storage_key),
            resolver=LocaleResolver.from_config(config.locale),
            route_map=route_map,
            engine=DomTranslationEngine(document, dictionaries),
            config=config,
        )

    # ========== Lifecycle ==========

    def initialize(self) -> Locale:
        """Resolve the locale for this load and bring the page to it."""
        self.locale = self.resolver.resolve(self.document.path, self.store.get())
        logger.info(f"Active locale on load: {self.codes.code(self.locale)}")

        self.bind()
        self.update_language_display()

        if self.locale is not self.default_locale:
            self.apply_translations(self.locale)

        return self.locale

    def bind(self) -> bool:
        """Attach the click handler to the toggle control; safe to repeat."""
        bound = self.document.add_listener(
            self.config.page.toggle_id, "click", "language-toggle", self.toggle
        )
        if not bound:
            logger.info(f"Toggle control #{self.config.page.toggle_id} not found, not binding")
        return bound

    def toggle(self) -> LanguageChange:
        """Switch to the other locale."""
        if self.locale is None:
            self.locale = self.resolver.resolve(self.document.path, self.store.get())

        previous = self.locale
        self.locale = self.resolver.other(previous)
        logger.info(
            f"Toggling language from {self.codes.code(previous)} to {self.codes.code(self.locale)}"
        )

        # Persist before touching the page so a reload sees the new choice
        self.store.set(self.locale)
        self.update_language_display()

        change = decide_language_change(
            self.document.path, self.locale, self.route_map, self.document.is_post
        )
        if change.in_place:
            self.apply_translations(self.locale)
        else:
            self.document.navigate(change.redirect_to)

        self.show_feedback()
        return change

    def close(self) -> None:
        self.store.close()

    # ========== In-place pipeline ==========

    def apply_translations(self, locale: Locale) -> None:
        self.engine.apply(locale)
        self.translate_post_content(locale)

    def translate_post_content(self, locale: Locale) -> bool:
        """
        Substitute the post title, subtitle and body from the payload

        Returns:
            True if any part of the body changed
        """
        if self.payload is None:
            return False
        if not self.payload.title or not self.payload.content:
            logger.info("Payload lacks a title or content block, body left as is")
            return False

        page = self.config.page
        code = self.codes.code(locale)
        content = self.payload.content_for(code)

        changed = False
        changed |= self._substitute(page.title_selector, locale, self.payload.title_for(code))
        changed |= self._substitute(page.subtitle_selector, locale, self.payload.subtitle_for(code))
        changed |= self._substitute(
            page.content_selector,
            locale,
            self.renderer.render(content) if content is not None else None,
            markup=True,
        )

        if changed:
            logger.info(f"Post content translated to {code}")
        return changed

    def _substitute(self, selector: str, locale: Locale, value: Optional[str],
                    markup: bool = False) -> bool:
        element = self.document.select_one(selector)
        if element is None:
            logger.debug(f"No element for {selector}, body part left as is")
            return False

        cached = element.get(HTML_CACHE)
        if locale is self.default_locale:
            if cached is None:
                return False
            del element[HTML_CACHE]
            replace_inner_html(element, cached)
            return True

        if value is None:
            logger.info(f"No {self.codes.code(locale)} translation for {selector}")
            return False

        if cached is None:
            element[HTML_CACHE] = element.decode_contents()

        if markup:
            replace_inner_html(element, value)
        else:
            element.string = value
        return True

    # ========== Display ==========

    def update_language_display(self) -> None:
        label = self.document.get_by_id(self.config.page.label_id)
        if label is not None and self.locale is not None:
            label.string = self.codes.code(self.locale).upper()

    def show_feedback(self) -> None:
        """Queue the transient acknowledgement of the new locale."""
        if not self.config.feedback.enabled or self.locale is None:
            return
        notification = self.snippets.feedback(self.codes.code(self.locale), self.config.feedback)
        self.document.notifications.append(notification)
