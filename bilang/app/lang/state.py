"""
Locale state.

Contains the two-value locale type and the mapping to its wire tokens,
without any I/O dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..exceptions import LocaleError


class Locale(Enum):
    """The two supported content languages."""

    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def other(self) -> "Locale":
        return Locale.SECONDARY if self is Locale.PRIMARY else Locale.PRIMARY


@dataclass(frozen=True)
class LocaleCodes:
    """
    Wire tokens for each locale.

    The tokens are what gets persisted, what keys the translation payload
    and what the document's ``lang`` attribute carries.
    """

    primary: str = "pt-BR"
    secondary: str = "en"

    @classmethod
    def from_config(cls, locale_config) -> "LocaleCodes":
        return cls(primary=locale_config.primary, secondary=locale_config.secondary)

    def code(self, locale: Locale) -> str:
        return self.primary if locale is Locale.PRIMARY else self.secondary

    def parse(self, value: Union[str, Locale, None]) -> Optional[Locale]:
        """Map an exact token (or a Locale) to a Locale, None when unrecognized."""
        if isinstance(value, Locale):
            return value
        if value == self.primary:
            return Locale.PRIMARY
        if value == self.secondary:
            return Locale.SECONDARY
        return None

    def parse_lang(self, value: Optional[str]) -> Optional[Locale]:
        """Like parse() but for ``lang`` attributes, which are case-insensitive."""
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        if lowered == self.primary.lower():
            return Locale.PRIMARY
        if lowered == self.secondary.lower():
            return Locale.SECONDARY
        return None

    def require(self, value: Union[str, Locale, None]) -> Locale:
        locale = self.parse(value)
        if locale is None:
            raise LocaleError(
                f"Unsupported locale {value!r}, expected {self.primary!r} or {self.secondary!r}",
                code="locale",
            )
        return locale
