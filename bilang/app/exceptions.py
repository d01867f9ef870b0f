"""
Custom exception hierarchy for bilang.

This module provides a structured exception hierarchy for consistent
error handling across the locale store, data loaders and page pipeline.
"""


class BilangError(Exception):
    """Base exception for all bilang errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(BilangError):
    """Configuration validation errors (invalid settings, missing values)."""

    pass


class LocaleError(BilangError):
    """A value that is not one of the two supported locales."""

    pass


class StorageError(BilangError):
    """Preference storage errors (unreadable file, database failure)."""

    pass


class StorageUnavailableError(StorageError):
    """Storage backend cannot be used at all (disabled, blocked, missing)."""

    pass


class PayloadError(BilangError):
    """Embedded translation payload could not be parsed or validated."""

    pass


class DictionaryError(BilangError):
    """Dictionary or route table data is missing or inconsistent."""

    pass
