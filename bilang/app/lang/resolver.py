from typing import Optional, Union

from .state import Locale, LocaleCodes


class LocaleResolver:
    """Computes the active locale from the URL path and the stored preference."""

    def __init__(self, codes: Optional[LocaleCodes] = None, secondary_prefix: str = "/en/"):
        self.codes = codes or LocaleCodes()
        self.secondary_prefix = secondary_prefix

    @classmethod
    def from_config(cls, locale_config) -> "LocaleResolver":
        return cls(
            codes=LocaleCodes.from_config(locale_config),
            secondary_prefix=locale_config.secondary_prefix,
        )

    def resolve(
        self,
        path: str,
        stored: Union[Locale, str, None] = None,
        default: Locale = Locale.PRIMARY,
    ) -> Locale:
        """
        Resolve the active locale.

        Args:
            path: URL path of the current document
            stored: Persisted preference, a Locale or its token
            default: Locale used when neither path nor preference decide

        Returns:
            SECONDARY for paths under the secondary prefix, otherwise the
            stored locale when it is valid, otherwise ``default``
        """
        if path and path.startswith(self.secondary_prefix):
            return Locale.SECONDARY

        locale = self.codes.parse(stored)
        if locale is not None:
            return locale

        return default

    @staticmethod
    def other(locale: Locale) -> Locale:
        return locale.other
