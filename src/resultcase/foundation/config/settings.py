"""Environment-based configuration using pydantic-settings.

Example:
    >>> from resultcase.foundation.config import get_settings
    >>> get_settings().logging.level
    'DEBUG'

    # Or with environment variables:
    # RESULTCASE_LOG_LEVEL=ERROR
    # RESULTCASE_LOG_FORMAT=json
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Configuration for the default console logger."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_LOG_",
        extra="ignore",
    )

    # DEBUG by default: user and short-circuited failures are logged at debug
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force ANSI colors (None = auto-detect)")
    include_timestamps: bool = True

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        return v.upper() if v.lower() in ("debug", "info", "warning", "error", "critical") else v.lower()


class ResultcaseSettings(BaseSettings):
    """Root settings, loaded from ``RESULTCASE_`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    environment: Literal["development", "staging", "production"] = "development"
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> ResultcaseSettings:
    """Get the cached settings instance."""
    return ResultcaseSettings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
