import os
from pathlib import Path
from typing import Dict, Optional

import toml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class LocaleConfig(BaseModel):
    """Locale tokens and URL convention with validation."""

    primary: str = "pt-BR"
    secondary: str = "en"
    secondary_prefix: str = "/en/"
    storage_key: str = "preferred-language"

    @field_validator('primary', 'secondary')
    @classmethod
    def validate_token(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ConfigurationError("Locale token cannot be empty")
        return v

    @field_validator('secondary_prefix')
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not (v.startswith('/') and v.endswith('/')) or v == '/':
            raise ConfigurationError(
                f"secondary_prefix must look like '/xx/', got {v!r}"
            )
        return v

    @model_validator(mode='after')
    def validate_distinct(self):
        """Exactly two different locales are supported."""
        if self.primary.lower() == self.secondary.lower():
            raise ConfigurationError(
                f"primary and secondary locale must differ (both {self.primary!r})"
            )
        return self


class StorageConfig(BaseModel):
    """Preference storage configuration with validation."""

    backend: str = "memory"
    path: str = "~/.bilang/preferences.json"
    dsn: str = "sqlite:///bilang.db"
    echo: bool = False

    @field_validator('backend')
    @classmethod
    def validate_backend(cls, v: str) -> str:
        if v not in ('memory', 'file', 'sql'):
            raise ConfigurationError(f"Unsupported storage backend: {v}")
        return v

    @field_validator('dsn')
    @classmethod
    def validate_dsn(cls, v: str) -> str:
        if not v.startswith(('sqlite', 'postgresql', 'mysql')):
            raise ConfigurationError(f"Unsupported database driver: {v.split(':')[0]}")
        return v


class DataConfig(BaseModel):
    dictionary_path: Optional[str] = None
    routes_path: Optional[str] = None


class PageConfig(BaseModel):
    toggle_id: str = "language-toggle"
    label_id: str = "current-lang"
    title_selector: str = "h1[data-toc-skip]"
    subtitle_selector: str = "p.post-desc"
    content_selector: str = ".content"
    payload_selector: str = "script#page-data"


class FeedbackConfig(BaseModel):
    enabled: bool = True
    duration_ms: int = 2500
    names: Dict[str, str] = Field(default_factory=lambda: {
        "pt-BR": "Português",
        "en": "English",
    })
    flags: Dict[str, str] = Field(default_factory=lambda: {
        "pt-BR": "🇧🇷",
        "en": "🇺🇸",
    })

    @field_validator('duration_ms')
    @classmethod
    def validate_duration(cls, v: int) -> int:
        if v < 0:
            raise ConfigurationError("duration_ms cannot be negative")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError(f"Unknown log level: {v}")
        return v


class Config(BaseSettings):
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    page: PageConfig = Field(default_factory=PageConfig)
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BILANG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def from_toml(cls, path: str | Path) -> "Config":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = toml.load(f)

        return cls(**data)


_config: Optional[Config] = None


def load_config(path: Optional[str | Path] = None) -> Config:
    global _config
    if _config is None:
        if path is None:
            path = os.environ.get("BILANG_CONFIG", "bilang.toml")

        config_path = Path(path)
        if config_path.exists():
            _config = Config.from_toml(config_path)
        else:
            _config = Config()

    return _config


def get_config() -> Config:
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next call reloads it."""
    global _config
    _config = None
