"""Factory facade for building Success/Failure results.

Every failure factory optionally logs through an injected ``ResultLogger``
before building its Failure. The log call carries the caller's context chain
prefixed with ``"ResultFactory - <Variant>Result"`` and the trailing params
``"ErrorCode: <code>"`` plus any extra params.

Two ways to use it:

- Module-level functions (``technical_error``, ``try_catch_default``, ...)
  delegate to a default ``ResultFactory`` that resolves the process-wide
  logger (``resultcase.observability.get_logger``) at call time.
- ``ResultFactory(logger=...)`` binds an explicit logger, for composition
  roots and tests that should not touch process-wide state.

Exception adapters:
    >>> parse = wrap_default({"context": ["Import", "parse"]}, parse_int)
    >>> parse("12")
    Success(12)
    >>> parse("x").is_technical_error()
    True
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from resultcase.foundation.errors import (
    AssertionFailedError,
    FactoryOptionsLike,
    LogPropertiesLike,
    api_error_options,
    factory_options,
    to_error_string,
)
from resultcase.observability import get_logger

from .details import (
    ApiErrorDetails,
    AssertionFailedErrorDetails,
    ErrorDetails,
    ShortCircuitedErrorDetails,
    TechnicalErrorDetails,
    UserErrorDetails,
)
from .result import Failure, Result, Success

if TYPE_CHECKING:
    from resultcase.foundation.errors import ApiErrorOptionsLike, FactoryOptions
    from resultcase.observability import ResultLogger

T = TypeVar("T")
E = TypeVar("E", bound=ErrorDetails)
D = TypeVar("D", bound=ErrorDetails)
P = ParamSpec("P")

_CLASS_CONTEXT = "ResultFactory"

DefaultFailure = Failure[AssertionFailedErrorDetails] | Failure[TechnicalErrorDetails]


class ResultFactory:
    """Builds results, logging failures through ``logger``.

    Args:
        logger: Logging collaborator. When None, the process-wide logger is
            looked up on every log call so the host can swap it at any time.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: ResultLogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ResultLogger:
        return self._logger if self._logger is not None else get_logger()

    # ─── Success ─────────────────────────────────────────────────────

    @staticmethod
    def success(value: T) -> Success[T]:
        """Wrap a value. Never logs."""
        return Success(value)

    # ─── API Errors ──────────────────────────────────────────────────

    @staticmethod
    def api_error_no_log(options: ApiErrorOptionsLike, response: object) -> Failure[ApiErrorDetails]:
        """Build an ApiError Failure without logging, regardless of ``options.log``."""
        return Failure(ApiErrorDetails(response, options))

    def api_error(self, options: ApiErrorOptionsLike, response: object) -> Failure[ApiErrorDetails]:
        """Build an ApiError Failure, logging at error level unless ``options.log`` is False.

        Only call this once the status and body have been inspected and the
        failure is worth a support investigation.
        """
        opts = api_error_options(options)
        if opts.log:
            props = opts.log_properties().with_context_prefix(f"{_CLASS_CONTEXT} - ApiErrorResult")
            self.logger.api_error(props, response, f"ErrorCode: {opts.error_code}")
        return Failure(ApiErrorDetails(response, opts))

    # ─── Error-level Failures ────────────────────────────────────────

    def assertion_failed_error(
        self,
        options: FactoryOptionsLike,
        error_code: str | None,
        message: object,
        *params: object,
    ) -> Failure[AssertionFailedErrorDetails]:
        """Build an AssertionFailed Failure, logging at error level unless suppressed."""
        opts = factory_options(options)
        if opts.log:
            self.logger.assertion_failed(_prefixed(opts, "AssertionFailedErrorResult"), message,
                                         f"ErrorCode: {error_code}", *params)
        return Failure(AssertionFailedErrorDetails(**_details_kwargs(opts, error_code, message, params)))

    def technical_error(
        self,
        options: FactoryOptionsLike,
        error_code: str | None,
        message: object,
        *params: object,
    ) -> Failure[TechnicalErrorDetails]:
        """Build a Technical Failure, logging at error level unless suppressed."""
        opts = factory_options(options)
        if opts.log:
            self.logger.technical_error(_prefixed(opts, "TechnicalErrorResult"), message,
                                        f"ErrorCode: {error_code}", *params)
        return Failure(TechnicalErrorDetails(**_details_kwargs(opts, error_code, message, params)))

    # ─── Debug-level Failures ────────────────────────────────────────

    def user_error(self, options: FactoryOptionsLike, error_code: str | None, message: str) -> Failure[UserErrorDetails]:
        """Build a User Failure. Logged at debug level since it is not a defect."""
        opts = factory_options(options)
        if opts.log:
            self.logger.debug(_prefixed(opts, "UserErrorResult"), message, f"ErrorCode: {error_code}")
        return Failure(UserErrorDetails(**_details_kwargs(opts, error_code, message, ())))

    def short_circuited_error(
        self, options: FactoryOptionsLike, error_code: str | None, message: str,
    ) -> Failure[ShortCircuitedErrorDetails]:
        """Build a ShortCircuited Failure. Logged at debug level."""
        opts = factory_options(options)
        if opts.log:
            self.logger.debug(_prefixed(opts, "ShortCircuitedErrorResult"), message, f"ErrorCode: {error_code}")
        return Failure(ShortCircuitedErrorDetails(**_details_kwargs(opts, error_code, message, ())))

    # ─── Classification ──────────────────────────────────────────────

    def from_error_object(self, log_props: LogPropertiesLike, caught: object) -> DefaultFailure:
        """Classify a caught value and log it at error level.

        AssertionFailedError becomes an AssertionFailed Failure. Anything else,
        including None and primitives, becomes a Technical Failure.
        """
        if AssertionFailedError.is_instance(caught):
            return self.assertion_failed_error(log_props, None, caught)
        return self.technical_error(log_props, None, to_error_string(caught))

    # ─── Exception Adapters ──────────────────────────────────────────

    def try_catch_default(self, log_props: LogPropertiesLike, fn: Callable[[], T]) -> Success[T] | DefaultFailure:
        """Run ``fn``; an exception is classified and logged via ``from_error_object``."""
        try:
            return Success(fn())
        except Exception as exc:
            return self.from_error_object(log_props, exc)

    async def try_catch_default_async(
        self, log_props: LogPropertiesLike, fn: Callable[[], Awaitable[T]],
    ) -> Success[T] | DefaultFailure:
        """Await ``fn()``; an exception is classified and logged. Never raises ``Exception``."""
        try:
            return Success(await fn())
        except Exception as exc:
            return self.from_error_object(log_props, exc)

    @staticmethod
    def try_catch(fn: Callable[[], T], failure_factory: Callable[[Exception], Failure[D]]) -> Result[T, D]:
        """Run ``fn``; an exception is handed to ``failure_factory``, which owns logging."""
        try:
            return Success(fn())
        except Exception as exc:
            return failure_factory(exc)

    @staticmethod
    async def try_catch_async(
        fn: Callable[[], Awaitable[T]], failure_factory: Callable[[Exception], Failure[D]],
    ) -> Result[T, D]:
        try:
            return Success(await fn())
        except Exception as exc:
            return failure_factory(exc)

    def wrap_default(self, log_props: LogPropertiesLike, fn: Callable[P, T]) -> Callable[P, Result[T, AssertionFailedErrorDetails | TechnicalErrorDetails]]:
        """Return ``fn`` with the same signature, its outcome wrapped by ``try_catch_default``."""
        @wraps(fn)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> Result[T, AssertionFailedErrorDetails | TechnicalErrorDetails]:
            return self.try_catch_default(log_props, lambda: fn(*args, **kwargs))
        return wrapped

    def wrap_default_async(
        self, log_props: LogPropertiesLike, fn: Callable[P, Awaitable[T]],
    ) -> Callable[P, Awaitable[Result[T, AssertionFailedErrorDetails | TechnicalErrorDetails]]]:
        """Async ``wrap_default``: the returned coroutine function resolves to a Result, never raises."""
        @wraps(fn)
        async def wrapped(*args: P.args, **kwargs: P.kwargs) -> Result[T, AssertionFailedErrorDetails | TechnicalErrorDetails]:
            return await self.try_catch_default_async(log_props, lambda: fn(*args, **kwargs))
        return wrapped

    @classmethod
    def wrap(cls, fn: Callable[P, T], failure_factory: Callable[[Exception], Failure[D]]) -> Callable[P, Result[T, D]]:
        @wraps(fn)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> Result[T, D]:
            return cls.try_catch(lambda: fn(*args, **kwargs), failure_factory)
        return wrapped

    @classmethod
    def wrap_async(
        cls, fn: Callable[P, Awaitable[T]], failure_factory: Callable[[Exception], Failure[D]],
    ) -> Callable[P, Awaitable[Result[T, D]]]:
        @wraps(fn)
        async def wrapped(*args: P.args, **kwargs: P.kwargs) -> Result[T, D]:
            return await cls.try_catch_async(lambda: fn(*args, **kwargs), failure_factory)
        return wrapped


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _prefixed(opts: FactoryOptions, variant: str) -> FactoryOptions:
    return opts.with_context_prefix(f"{_CLASS_CONTEXT} - {variant}")  # type: ignore[return-value]


def _details_kwargs(opts: FactoryOptions, error_code: str | None, message: object, params: tuple[object, ...]) -> dict:
    """Constructor kwargs shared by the non-API variants.

    The message is stringified and extra params appended as ``" - <params>"``.
    """
    formatted = to_error_string(message)
    if params:
        formatted += f" - {to_error_string(list(params))}"
    return {
        "context": opts.context,
        "error_code": error_code,
        "error_message": formatted,
        "error_instance_id": opts.error_instance_id,
        "correlation_id": opts.correlation_id,
    }


# ═════════════════════════════════════════════════════════════════════════════
# Module-level Facade (process-wide logger)
# ═════════════════════════════════════════════════════════════════════════════

_default_factory = ResultFactory()

success = ResultFactory.success
api_error_no_log = ResultFactory.api_error_no_log
api_error = _default_factory.api_error
assertion_failed_error = _default_factory.assertion_failed_error
technical_error = _default_factory.technical_error
user_error = _default_factory.user_error
short_circuited_error = _default_factory.short_circuited_error
from_error_object = _default_factory.from_error_object
try_catch_default = _default_factory.try_catch_default
try_catch_default_async = _default_factory.try_catch_default_async
try_catch = ResultFactory.try_catch
try_catch_async = ResultFactory.try_catch_async
wrap_default = _default_factory.wrap_default
wrap_default_async = _default_factory.wrap_default_async
wrap = ResultFactory.wrap
wrap_async = ResultFactory.wrap_async
