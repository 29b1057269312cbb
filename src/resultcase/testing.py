"""Test utilities for code that builds results.

Provides a RecordingLogger that captures every call the result factory makes,
and a context manager that installs one process-wide:

    >>> from resultcase.testing import recording_logger
    >>> with recording_logger() as log:
    ...     technical_error({"context": ["Orders"]}, "DB", "down")
    >>> log.calls_at("error")[0].kind
    'technical_error'
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from resultcase.observability import format_log_properties_context, peek_logger, reset_logger, set_logger

if TYPE_CHECKING:
    from collections.abc import Generator

    from resultcase.observability import LogContext, ResultLogger

LogLevel = Literal["debug", "info", "warning", "error"]


@dataclass(slots=True)
class LogCall:
    """Record of a single logger call."""
    level: LogLevel
    kind: str
    context: LogContext
    message: object
    params: tuple[object, ...]

    @property
    def formatted_context(self) -> str:
        return format_log_properties_context(self.context)


@dataclass
class RecordingLogger:
    """ResultLogger that records calls instead of rendering them."""
    calls: list[LogCall] = field(default_factory=list)

    def debug(self, context: LogContext, message: object = None, *params: object) -> None:
        self._record("debug", "debug", context, message, params)

    def info(self, context: LogContext, message: object = None, *params: object) -> None:
        self._record("info", "info", context, message, params)

    def warning(self, context: LogContext, message: object = None, *params: object) -> None:
        self._record("warning", "warning", context, message, params)

    def error(self, context: LogContext, message: object = None, *params: object) -> None:
        self._record("error", "error", context, message, params)

    def technical_error(self, context: LogContext, message: object = None, *params: object) -> None:
        self._record("error", "technical_error", context, message, params)

    def assertion_failed(self, context: LogContext, message: object = None, *params: object) -> None:
        self._record("error", "assertion_failed", context, message, params)

    def api_error(self, context: LogContext, response: object, *params: object) -> None:
        self._record("error", "api_error", context, response, params)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> LogCall | None:
        return self.calls[-1] if self.calls else None

    def calls_at(self, level: LogLevel) -> list[LogCall]:
        return [c for c in self.calls if c.level == level]

    def assert_not_called(self) -> None:
        if self.calls:
            raise AssertionError(f"Logger called {self.call_count} times: {[c.kind for c in self.calls]}")

    def clear(self) -> None:
        self.calls.clear()

    def _record(self, level: LogLevel, kind: str, context: LogContext, message: object,
                params: tuple[object, ...]) -> None:
        self.calls.append(LogCall(level, kind, context, message, params))


@contextmanager
def recording_logger() -> Generator[RecordingLogger, None, None]:
    """Install a RecordingLogger process-wide, restoring exactly the previous state on exit."""
    previous: ResultLogger | None = peek_logger()
    logger = RecordingLogger()
    set_logger(logger)
    try:
        yield logger
    finally:
        if previous is None:
            reset_logger()
        else:
            set_logger(previous)
