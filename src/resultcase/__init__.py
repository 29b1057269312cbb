"""Resultcase - Categorized, structured results instead of uncaught exceptions.

A Result is either a ``Success`` holding a value or a ``Failure`` holding
structured error details. Failures are categorized (API, assertion, technical,
user, short-circuited), carry the caller's context chain and a support
reference id, and are logged through an injectable logger when built.

Quick Start:
    >>> from resultcase import success, technical_error, try_catch_default
    >>>
    >>> ctx = {"context": ["Billing", "Invoices", "create"], "correlation_id": "req-81f2"}
    >>> result = try_catch_default(ctx, lambda: int("12")).map(lambda n: n * 2)
    >>> result.value_or_default(0)
    24

Catch Policies (distinct methods, never flags):
    >>> result.map(parse)                          # exceptions propagate
    >>> result.map_catch_default(ctx, parse)       # exceptions -> logged TechnicalError
    >>> result.map_catch(parse, my_failure_factory)  # exceptions -> my_failure_factory(exc)

Wrapping Functions:
    >>> safe_parse = wrap_default(ctx, parse_int)
    >>> safe_parse("x").is_technical_error()
    True

Logging (composition root):
    >>> from resultcase import configure_logging, set_logger
    >>> configure_logging(format="json", level="INFO")   # or set_logger(my_logger)

Custom Error Variants:
    >>> class PaymentDeclinedErrorDetails(ErrorDetails, tag="PaymentDeclinedError"):
    ...     '''Card issuer refused the charge.'''
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    ApiErrorOptions,
    AssertionFailedError,
    CallerContext,
    FactoryOptions,
    LogProperties,
    NestHttpErrorResponse,
    ProblemDetails,
    StandardApiErrorResponse,
    UnreachableError,
    ValidationProblemDetails,
    create_error_instance_id,
    throw_assertion_failed_error,
    throw_unreachable_error,
    to_error_string,
)

# Settings
from .foundation.config import ResultcaseSettings, clear_settings_cache, get_settings

# Logging
from .observability import (
    ConsoleLogger,
    ResultLogger,
    configure_logging,
    format_caller_context,
    get_logger,
    reset_logger,
    set_logger,
)

# Results
from .results import (
    DEFAULT_ERROR_MESSAGE,
    UNEXPECTED_ERROR_CODE,
    AllErrorDetails,
    ApiErrorDetails,
    ApiResult,
    AssertionFailedErrorDetails,
    AsyncResult,
    ErrorDetails,
    ErrorResultFactory,
    Failure,
    Result,
    ResultFactory,
    ResultTag,
    ShortCircuitedErrorDetails,
    StandardErrorTag,
    Success,
    TechnicalErrorDetails,
    UserErrorDetails,
    api_error,
    api_error_no_log,
    assertion_failed_error,
    from_error_object,
    registered_tags,
    sequence,
    short_circuited_error,
    success,
    technical_error,
    traverse,
    try_catch,
    try_catch_async,
    try_catch_default,
    try_catch_default_async,
    user_error,
    wrap,
    wrap_async,
    wrap_default,
    wrap_default_async,
)

__all__ = [
    # Version
    "__version__",
    # Results
    "Result",
    "Success",
    "Failure",
    "ResultTag",
    "AsyncResult",
    "ApiResult",
    "ErrorResultFactory",
    "UNEXPECTED_ERROR_CODE",
    "sequence",
    "traverse",
    # Error details
    "ErrorDetails",
    "ApiErrorDetails",
    "AssertionFailedErrorDetails",
    "ShortCircuitedErrorDetails",
    "TechnicalErrorDetails",
    "UserErrorDetails",
    "AllErrorDetails",
    "StandardErrorTag",
    "DEFAULT_ERROR_MESSAGE",
    "registered_tags",
    # Factory
    "ResultFactory",
    "success",
    "api_error_no_log",
    "api_error",
    "assertion_failed_error",
    "technical_error",
    "user_error",
    "short_circuited_error",
    "from_error_object",
    "try_catch_default",
    "try_catch_default_async",
    "try_catch",
    "try_catch_async",
    "wrap_default",
    "wrap_default_async",
    "wrap",
    "wrap_async",
    # Errors
    "AssertionFailedError",
    "UnreachableError",
    "throw_assertion_failed_error",
    "throw_unreachable_error",
    "to_error_string",
    "create_error_instance_id",
    "CallerContext",
    "LogProperties",
    "FactoryOptions",
    "ApiErrorOptions",
    "ProblemDetails",
    "ValidationProblemDetails",
    "NestHttpErrorResponse",
    "StandardApiErrorResponse",
    # Logging
    "ResultLogger",
    "ConsoleLogger",
    "configure_logging",
    "get_logger",
    "set_logger",
    "reset_logger",
    "format_caller_context",
    # Settings
    "ResultcaseSettings",
    "get_settings",
    "clear_settings_cache",
]
