"""
Page regions the translation engine rewrites.

Each region names a CSS selector from the theme's markup, what to rewrite
on the matched elements (their text or one attribute) and which dictionary
table supplies the translations.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Region:
    name: str
    selector: str
    table: str
    attribute: Optional[str] = None
    phrase_fallback: bool = False

    @property
    def is_attribute(self) -> bool:
        return self.attribute is not None


DEFAULT_REGIONS: Tuple[Region, ...] = (
    # Interface chrome
    Region("navigation", "#sidebar .nav-link span", "ui"),
    Region("search-placeholder", "#search-input", "ui", attribute="placeholder"),
    Region("search-cancel", "#search-cancel", "ui"),
    Region("panel-headings", "#access-lastmod h2, #access-tags h2", "ui"),
    Region("post-meta", ".post-meta span", "ui"),
    Region("share-label", ".share-label", "ui"),
    Region("related-heading", "#related-label", "ui"),
    Region("post-navigation", ".post-navigation .btn", "ui", attribute="aria-label"),
    Region("footer-rights", 'footer span[data-bs-toggle="tooltip"]', "ui"),
    Region("license", ".license-wrapper", "ui"),
    Region("call-to-action", ".ko-fi-container a", "ui"),

    # Tags
    Region("tags", ".post-tag", "tags", phrase_fallback=True),

    # Known posts
    Region("recent-titles", "#access-lastmod a", "titles", phrase_fallback=True),
    Region("related-titles", "#related-posts h4", "titles", phrase_fallback=True),
    Region("listing-titles", "#post-list .card-title", "titles", phrase_fallback=True),
    Region("listing-descriptions", "#post-list .card-text p", "descriptions", phrase_fallback=True),
    Region("listing-links", "#post-list .post-preview", "links", attribute="href"),
    Region("recent-links", "#access-lastmod a", "links", attribute="href"),
)
