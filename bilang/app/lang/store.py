from typing import Optional, Union

from ..exceptions import StorageError
from ..utils.logger import get_logger
from .state import Locale, LocaleCodes

logger = get_logger("lang.store")


class LocaleStore:
    """
    Reads and writes the persisted locale preference.

    Storage failures never propagate: the value chosen during this page
    lifetime is kept in memory and a warning is logged instead.
    """

    def __init__(self, storage, codes: Optional[LocaleCodes] = None,
                 key: str = "preferred-language"):
        self.storage = storage
        self.codes = codes or LocaleCodes()
        self.key = key
        self._memory: Optional[Locale] = None
        self._degraded = False

    @property
    def degraded(self) -> bool:
        """True once the backend failed and the store fell back to memory."""
        return self._degraded

    def get(self) -> Optional[Locale]:
        if self._degraded:
            return self._memory

        try:
            raw = self.storage.get(self.key)
        except StorageError as e:
            self._degrade("read", e)
            return self._memory

        locale = self.codes.parse(raw)
        if raw is not None and locale is None:
            logger.debug(f"Ignoring unrecognized stored locale: {raw!r}")
        return locale

    def set(self, locale: Union[Locale, str]) -> None:
        locale = self.codes.require(locale)
        self._memory = locale
        if self._degraded:
            return

        try:
            self.storage.set(self.key, self.codes.code(locale))
        except StorageError as e:
            self._degrade("write", e)

    def clear(self) -> None:
        self._memory = None
        if self._degraded:
            return

        try:
            self.storage.delete(self.key)
        except StorageError as e:
            self._degrade("clear", e)

    def close(self) -> None:
        """Release the backend, e.g. the database engine of SqlStorage."""
        self.storage.close()

    def _degrade(self, action: str, error: StorageError) -> None:
        logger.warning(f"Locale preference {action} failed, keeping it in memory: {error}")
        self._degraded = True
