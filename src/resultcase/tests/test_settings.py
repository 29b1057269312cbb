"""Tests for environment settings."""

from __future__ import annotations

import pytest

from resultcase.foundation.config import LoggingSettings, ResultcaseSettings, clear_settings_cache, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("RESULTCASE_LOG_LEVEL", "RESULTCASE_LOG_FORMAT", "RESULTCASE_ENVIRONMENT"):
        monkeypatch.delenv(var, raising=False)
    settings = ResultcaseSettings(_env_file=None)
    assert settings.environment == "development"
    assert not settings.is_production
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "console"
    assert settings.logging.colors is None
    assert settings.logging.include_timestamps


def test_logging_env_overrides_are_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTCASE_LOG_LEVEL", "warning")
    monkeypatch.setenv("RESULTCASE_LOG_FORMAT", "JSON")
    settings = LoggingSettings()
    assert settings.level == "WARNING"
    assert settings.format == "json"


def test_production_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTCASE_ENVIRONMENT", "Production")
    assert ResultcaseSettings(_env_file=None).is_production


def test_invalid_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTCASE_LOG_LEVEL", "verbose")
    with pytest.raises(ValueError):
        LoggingSettings()


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    clear_settings_cache()
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("RESULTCASE_ENVIRONMENT", "staging")
    assert get_settings().environment == first.environment
    clear_settings_cache()
    assert get_settings().environment == "staging"
