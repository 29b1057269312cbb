"""Logging collaborator consumed by the result factory.

The factory never owns a logger. It calls whatever ``ResultLogger`` the host
application installs with ``set_logger()`` (or passes explicitly to
``ResultFactory``). ``ConsoleLogger`` is the default implementation:

- Leveled calls mirror the failure taxonomy (technical, assertion, API)
- Caller context chains are flattened to ``Domain.App.Service.op``
- Human-readable console output in development, JSON Lines in production

Quick Start:
    >>> from resultcase.observability import configure_logging, get_logger
    >>> configure_logging(format="json", level="ERROR")
    >>> log = get_logger()
    >>> log.error({"context": ["Billing", "charge"]}, "card declined")
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

from resultcase.foundation.errors import JsonDict, LogProperties, log_properties, to_error_string

if TYPE_CHECKING:
    from resultcase.foundation.config import LoggingSettings

LogContext = str | LogProperties | Mapping[str, Any]

UNKNOWN_CONTEXT = "UNKNOWN CONTEXT"


# ─────────────────────────────────────────────────────────────────────────────
# Collaborator Protocol
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class ResultLogger(Protocol):
    """Leveled logging interface the result factory depends on.

    ``context`` is either a raw string or log properties carrying the caller
    context chain, correlation id and error instance id.
    """

    def debug(self, context: LogContext, message: object = None, *params: object) -> None: ...
    def info(self, context: LogContext, message: object = None, *params: object) -> None: ...
    def warning(self, context: LogContext, message: object = None, *params: object) -> None: ...
    def error(self, context: LogContext, message: object = None, *params: object) -> None: ...
    def technical_error(self, context: LogContext, message: object = None, *params: object) -> None: ...
    def assertion_failed(self, context: LogContext, message: object = None, *params: object) -> None: ...
    def api_error(self, context: LogContext, response: object, *params: object) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# Context Formatting
# ─────────────────────────────────────────────────────────────────────────────


def format_caller_context(chain: tuple[str, ...] | list[str] | None) -> str:
    """Join a caller context chain with dots, or the unknown-context sentinel."""
    return ".".join(chain) if chain else UNKNOWN_CONTEXT


def format_log_properties_context(context: LogContext) -> str:
    """Format a raw string or log properties into a context string."""
    if isinstance(context, str):
        return context
    return format_caller_context(log_properties(context).context)


# ─────────────────────────────────────────────────────────────────────────────
# Entries & Renderers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class LogEntry:
    """Single log record with structured fields."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts = [f"{c['dim']}{entry.ts_human}{c['reset']}"] if self.show_timestamp else []
        parts += [f"{_LEVEL_COLORS.get(entry.level, c['dim']) if self.colors else ''}[{entry.level}]{c['reset']}",
                  f"{c['bold']}{entry.event}{c['reset']}"]
        parts += [f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}"
                  for k, v in sorted(entry.context.items()) if v is not None]
        print(" ".join(parts), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        print(orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event,
                            **entry.context}, default=str, option=orjson.OPT_NON_STR_KEYS).decode(),
              file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Console Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class ConsoleLogger:
    """Default ResultLogger: formats each call into a LogEntry and renders it.

    Example:
        >>> log = ConsoleLogger(renderer=ConsoleRenderer(colors=False))
        >>> log.technical_error({"context": ["Orders", "submit"]}, "db down", "ErrorCode: DB")
        # => 10:30:45.120 [error] TECHNICAL_ERROR: Orders.submit - db down kind="TECHNICAL_ERROR" params=[ErrorCode: DB]
    """

    renderer: LogRenderer | None = None
    level: int = logging.DEBUG

    def debug(self, context: LogContext, message: object = None, *params: object) -> None:
        self._log(logging.DEBUG, "DEBUG", context, message, params)

    def info(self, context: LogContext, message: object = None, *params: object) -> None:
        self._log(logging.INFO, "INFO", context, message, params)

    def warning(self, context: LogContext, message: object = None, *params: object) -> None:
        self._log(logging.WARNING, "WARN", context, message, params)

    def error(self, context: LogContext, message: object = None, *params: object) -> None:
        self._log(logging.ERROR, "ERROR", context, message, params)

    def technical_error(self, context: LogContext, message: object = None, *params: object) -> None:
        self._log(logging.ERROR, "TECHNICAL_ERROR", context, message, params)

    def assertion_failed(self, context: LogContext, message: object = None, *params: object) -> None:
        self._log(logging.ERROR, "ASSERTION_FAILED", context, message, params)

    def api_error(self, context: LogContext, response: object, *params: object) -> None:
        self._log(logging.ERROR, "API_ERROR", context, response, params)

    def _log(self, level: int, kind: str, context: LogContext, message: object, params: tuple[object, ...]) -> None:
        if level < self.level:
            return
        fields: JsonDict = {"kind": kind}
        if not isinstance(context, str):
            props = log_properties(context)
            fields["correlation_id"] = props.correlation_id
            fields["error_instance_id"] = props.error_instance_id
        if params:
            fields["params"] = [p if isinstance(p, str) else to_error_string(p) for p in params]
        event = format_log_message(kind, context, message)
        (self.renderer or _default_renderer()).render(LogEntry(time.time(), _level_name(level), event, fields))


def format_log_message(kind: str, context: LogContext, message: object = None) -> str:
    """``"<KIND>: <context>[ - CorrelationId: x][ - ErrorInstanceId: y][ - message]"``"""
    formatted = f"{kind}: {format_log_properties_context(context)}"
    if not isinstance(context, str):
        props = log_properties(context)
        if props.correlation_id:
            formatted += f" - CorrelationId: {props.correlation_id}"
        if props.error_instance_id:
            formatted += f" - ErrorInstanceId: {props.error_instance_id}"
    if message is not None and message != "":
        formatted += f" - {to_error_string(message)}"
    return formatted


# ─────────────────────────────────────────────────────────────────────────────
# Process-wide Logger (owned by the composition root)
# ─────────────────────────────────────────────────────────────────────────────


_logger: ResultLogger | None = None


def configure_logging(
    format: str = "console",  # noqa: A002 - mirrors settings field name
    level: str = "DEBUG",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
    show_timestamp: bool = True,
) -> ConsoleLogger:
    """Build a ConsoleLogger, install it process-wide and return it. Format: "console", "json", "none"."""
    match format:
        case "console":
            renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors,
                                                    show_timestamp=show_timestamp)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    logger = ConsoleLogger(renderer=renderer, level=getattr(logging, level.upper(), logging.DEBUG))
    set_logger(logger)
    return logger


def configure_logging_from_settings(settings: LoggingSettings | None = None) -> ConsoleLogger:
    """Install a ConsoleLogger configured from environment settings."""
    if settings is None:
        from resultcase.foundation.config import get_settings
        settings = get_settings().logging
    return configure_logging(settings.format, settings.level, colors=settings.colors,
                             show_timestamp=settings.include_timestamps)


def get_logger() -> ResultLogger:
    """Get the process-wide logger, configuring one from settings on first use."""
    return _logger if _logger is not None else configure_logging_from_settings()


def peek_logger() -> ResultLogger | None:
    """The installed logger, or None. Unlike get_logger() this never configures one."""
    return _logger


def set_logger(logger: ResultLogger) -> None:
    """Replace the process-wide logger."""
    global _logger
    _logger = logger


def reset_logger() -> None:
    """Forget the process-wide logger (useful for testing)."""
    global _logger
    _logger = None


def _default_renderer() -> LogRenderer:
    return ConsoleRenderer()


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {"debug": _COLORS["dim"], "info": _COLORS["green"], "warning": _COLORS["yellow"],
                 "error": _COLORS["red"], "critical": _COLORS["red"]}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    match v:
        case str(): return f'{c["yellow"]}"{v}"{c["reset"]}'
        case bool(): return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
        case int() | float(): return f'{c["blue"]}{v}{c["reset"]}'
        case list() | tuple(): return f'{c["dim"]}[{", ".join(map(str, v))}]{c["reset"]}'
        case _: return f'{c["white"]}{v!r}{c["reset"]}'
