"""Configuration: environment settings for resultcase."""

from .settings import LoggingSettings, ResultcaseSettings, clear_settings_cache, get_settings

__all__ = ["ResultcaseSettings", "LoggingSettings", "get_settings", "clear_settings_cache"]
