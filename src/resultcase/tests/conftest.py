"""Shared fixtures: every test gets a fresh RecordingLogger installed process-wide."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from resultcase.foundation.config import clear_settings_cache
from resultcase.observability import reset_logger, set_logger
from resultcase.testing import RecordingLogger


@pytest.fixture(autouse=True)
def log() -> Iterator[RecordingLogger]:
    logger = RecordingLogger()
    set_logger(logger)
    yield logger
    reset_logger()
    clear_settings_cache()
