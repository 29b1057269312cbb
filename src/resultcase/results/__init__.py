"""Result pattern: Success/Failure variants, error details and the factory facade.

Example:
    >>> from resultcase.results import success, user_error
    >>>
    >>> def check_age(age: int):
    ...     if age < 18:
    ...         return user_error({"context": ["Signup", "check_age"]}, "UNDERAGE", "Must be 18+")
    ...     return success(age)
    >>>
    >>> check_age(12).is_user_error()
    True
"""

from .details import (
    DEFAULT_ERROR_MESSAGE,
    AllErrorDetails,
    ApiErrorDetails,
    AssertionFailedErrorDetails,
    ErrorDetails,
    ShortCircuitedErrorDetails,
    StandardErrorTag,
    TechnicalErrorDetails,
    UserErrorDetails,
    registered_tags,
    variant_for_tag,
)
from .factory import (
    ResultFactory,
    api_error,
    api_error_no_log,
    assertion_failed_error,
    from_error_object,
    short_circuited_error,
    success,
    technical_error,
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
from .result import (
    UNEXPECTED_ERROR_CODE,
    ApiResult,
    AsyncResult,
    ErrorResultFactory,
    Failure,
    Result,
    ResultTag,
    Success,
    sequence,
    traverse,
)

__all__ = [
    # Results
    "Result", "Success", "Failure", "ResultTag", "UNEXPECTED_ERROR_CODE",
    "AsyncResult", "ApiResult", "ErrorResultFactory",
    # Error details
    "ErrorDetails", "ApiErrorDetails", "AssertionFailedErrorDetails", "ShortCircuitedErrorDetails",
    "TechnicalErrorDetails", "UserErrorDetails", "AllErrorDetails",
    "StandardErrorTag", "DEFAULT_ERROR_MESSAGE", "registered_tags", "variant_for_tag",
    # Factory
    "ResultFactory", "success", "api_error_no_log", "api_error", "assertion_failed_error",
    "technical_error", "user_error", "short_circuited_error", "from_error_object",
    "try_catch_default", "try_catch_default_async", "try_catch", "try_catch_async",
    "wrap_default", "wrap_default_async", "wrap", "wrap_async",
    # Collection operations
    "sequence", "traverse",
]
