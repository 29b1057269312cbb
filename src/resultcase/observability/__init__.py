"""Observability: the logging collaborator used by the result factory."""

from .logger import (
    UNKNOWN_CONTEXT,
    ConsoleLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogContext,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    ResultLogger,
    configure_logging,
    configure_logging_from_settings,
    format_caller_context,
    format_log_message,
    format_log_properties_context,
    get_logger,
    peek_logger,
    reset_logger,
    set_logger,
)

__all__ = [
    "ResultLogger", "ConsoleLogger", "LogContext", "LogEntry",
    "LogRenderer", "ConsoleRenderer", "JsonRenderer", "NoOpRenderer",
    "configure_logging", "configure_logging_from_settings", "get_logger", "peek_logger", "set_logger", "reset_logger",
    "format_caller_context", "format_log_properties_context", "format_log_message", "UNKNOWN_CONTEXT",
]
