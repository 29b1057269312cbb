"""Error plumbing for resultcase.

- AssertionFailedError/UnreachableError: Marker exceptions
- to_error_string: Stable stringification of any caught value
- create_error_instance_id: Support reference ids
- LogProperties/FactoryOptions/ApiErrorOptions: Caller context models
- ProblemDetails and friends: HTTP API error response shapes
"""

from .errors import (
    AssertionFailedError,
    UnreachableError,
    create_error_instance_id,
    throw_assertion_failed_error,
    throw_unreachable_error,
    to_error_string,
)
from .http import NestHttpErrorResponse, ProblemDetails, StandardApiErrorResponse, ValidationProblemDetails
from .types import (
    ApiErrorOptions,
    ApiErrorOptionsLike,
    CallerContext,
    FactoryOptions,
    FactoryOptionsLike,
    JsonDict,
    JsonValue,
    LogProperties,
    LogPropertiesLike,
    api_error_options,
    coerce_caller_context,
    factory_options,
    log_properties,
)

__all__ = [
    # Exceptions
    "AssertionFailedError", "UnreachableError", "throw_assertion_failed_error", "throw_unreachable_error",
    # Utilities
    "to_error_string", "create_error_instance_id",
    # Context models
    "CallerContext", "coerce_caller_context", "LogProperties", "FactoryOptions", "ApiErrorOptions",
    "LogPropertiesLike", "FactoryOptionsLike", "ApiErrorOptionsLike",
    "log_properties", "factory_options", "api_error_options",
    # JSON aliases
    "JsonDict", "JsonValue",
    # HTTP shapes
    "ProblemDetails", "ValidationProblemDetails", "NestHttpErrorResponse", "StandardApiErrorResponse",
]
