"""Success/Failure result variants.

A Result is a discriminated union of exactly two immutable variants:

- ``Success`` owns one value and no error details
- ``Failure`` owns one ErrorDetails instance and no value

Both implement the same operation set. Operations that run a caller
callback come in three catch policies, each a distinct method:

- ``map`` / ``and_then`` / ``or_else`` / ``fold``: exceptions raised by the
  callback propagate to the caller
- ``*_catch_default(log_props, ...)``: exceptions become a logged
  TechnicalErrorDetails Failure with code ``UNEXPECTED``
- ``*_catch(..., failure_factory)``: exceptions are handed to the factory,
  which owns classification and logging

Railway-oriented composition:
    >>> from resultcase import success
    >>> (
    ...     success("42")
    ...     .map(int)
    ...     .and_then(lambda n: success(n * 2))
    ...     .value_or_default(0)
    ... )
    84
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Never, TypeAlias, TypeVar, cast

from .details import (
    ApiErrorDetails,
    AssertionFailedErrorDetails,
    ErrorDetails,
    ShortCircuitedErrorDetails,
    TechnicalErrorDetails,
    UserErrorDetails,
)

if TYPE_CHECKING:
    from resultcase.foundation.errors import LogPropertiesLike

T = TypeVar("T")  # Success value type
E = TypeVar("E", bound=ErrorDetails)  # Error details type
U = TypeVar("U")  # Mapped success value type
F = TypeVar("F", bound=ErrorDetails)  # Mapped error details type
R = TypeVar("R")  # Fold/else return type

UNEXPECTED_ERROR_CODE = "UNEXPECTED"


class ResultTag(StrEnum):
    """Discriminant tags of the two result variants."""

    SUCCESS = "Success"
    FAILURE = "Failure"


# Turns a caught exception into a Failure; the caller owns logging
ErrorResultFactory: TypeAlias = "Callable[[Exception], Failure[Any]]"


class Result(ABC, Generic[T, E]):
    """Outcome of a computation: ``Success(value)`` or ``Failure(error_details)``.

    ``is_success``/``is_failure`` are mutually exclusive class-level constants
    and ``discriminant_tag`` is ``"Success"`` or ``"Failure"``, so callers can
    branch with ``if``, ``match`` on the tag, or structural patterns:

        >>> match result:
        ...     case Success(value): ...
        ...     case Failure(details): ...

    Results are never mutated; every operation returns a new Result or an
    existing immutable one.
    """

    __slots__ = ()

    discriminant_tag: ClassVar[ResultTag]
    is_success: ClassVar[bool]
    is_failure: ClassVar[bool]

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    @abstractmethod
    def error_details(self) -> E | None: ...

    # ─── Error Kind Guards ────────────────────────────────────────────

    def is_error_details_instance_of(self, variant: type[ErrorDetails]) -> bool:
        """True if this is a Failure whose details are exactly ``variant``."""
        return self.is_failure and variant.is_instance(self.error_details)

    def is_api_error(self) -> bool:
        return self.is_error_details_instance_of(ApiErrorDetails)

    def is_assertion_failed_error(self) -> bool:
        return self.is_error_details_instance_of(AssertionFailedErrorDetails)

    def is_technical_error(self) -> bool:
        return self.is_error_details_instance_of(TechnicalErrorDetails)

    def is_user_error(self) -> bool:
        return self.is_error_details_instance_of(UserErrorDetails)

    def is_short_circuited_error(self) -> bool:
        return self.is_error_details_instance_of(ShortCircuitedErrorDetails)

    # ─── Conversion ──────────────────────────────────────────────────

    @abstractmethod
    def to_tuple(self) -> tuple[T | None, E | None]:
        """``(value, None)`` for Success, ``(None, details)`` for Failure."""

    @abstractmethod
    def to_void_result(self) -> Result[None, E]:
        """Drop the success value, keeping the outcome."""

    # ─── Value Extraction ────────────────────────────────────────────

    @abstractmethod
    def value_or_none(self) -> T | None: ...

    @abstractmethod
    def value_or_default(self, default: R) -> T | R: ...

    @abstractmethod
    def value_or_else(self, on_failure: Callable[[E], R]) -> T | R: ...

    @abstractmethod
    def value_or_raise(self, exception_factory: Callable[[E], BaseException]) -> T:
        """Success value, or raise exactly the exception the factory builds."""

    @abstractmethod
    def error_details_or_none(self) -> E | None: ...

    @abstractmethod
    def error_details_or_default(self, default: R) -> E | R: ...

    @abstractmethod
    def error_details_or_else(self, on_success: Callable[[], R]) -> E | R: ...

    @abstractmethod
    def error_details_or_raise(self, exception_factory: Callable[[], BaseException]) -> E: ...

    # ─── Fold ────────────────────────────────────────────────────────

    @abstractmethod
    def fold(self, on_success: Callable[[T], U], on_failure: Callable[[E], R]) -> U | R:
        """Unwrap via callbacks. Exceptions from either callback propagate."""

    @abstractmethod
    def fold_catch_default(
        self,
        log_props: LogPropertiesLike,
        on_success: Callable[[T], U],
        on_failure: Callable[[E], R],
    ) -> U | R | Failure[TechnicalErrorDetails]:
        """Like fold, but an exception from ``on_success`` becomes a logged technical Failure."""

    @abstractmethod
    def fold_catch(
        self,
        on_success: Callable[[T], U],
        failure_factory: Callable[[Exception], Failure[F]],
        on_failure: Callable[[E], R],
    ) -> U | R | Failure[F]:
        """Like fold, but an exception from ``on_success`` is passed to ``failure_factory``."""

    # ─── Map ─────────────────────────────────────────────────────────

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Transform the success value. Exceptions from ``f`` propagate."""

    @abstractmethod
    def map_catch_default(self, log_props: LogPropertiesLike, f: Callable[[T], U]) -> Result[U, E | TechnicalErrorDetails]:
        """Transform the success value; exceptions become a logged technical Failure."""

    @abstractmethod
    def map_catch(self, f: Callable[[T], U], failure_factory: Callable[[Exception], Failure[F]]) -> Result[U, E | F]:
        """Transform the success value; exceptions go to ``failure_factory``."""

    @abstractmethod
    def map_error(self, f: Callable[[E], F]) -> Result[T, F]:
        """Transform the error details, leaving successes unchanged."""

    # ─── Chain ───────────────────────────────────────────────────────

    @abstractmethod
    def and_then(self, f: Callable[[T], Result[U, F]]) -> Result[U, E | F]:
        """Monadic bind. Failures short-circuit; exceptions from ``f`` propagate."""

    @abstractmethod
    def and_then_catch_default(
        self, log_props: LogPropertiesLike, f: Callable[[T], Result[U, F]],
    ) -> Result[U, E | F | TechnicalErrorDetails]: ...

    @abstractmethod
    def and_then_catch(
        self, f: Callable[[T], Result[U, F]], failure_factory: ErrorResultFactory,
    ) -> Result[U, Any]: ...

    @abstractmethod
    def or_else(self, f: Callable[[E], Result[U, F]]) -> Result[T | U, F]:
        """Compensate a Failure with a new Result. Successes pass through."""

    @abstractmethod
    def or_else_catch_default(
        self, log_props: LogPropertiesLike, f: Callable[[E], Result[U, F]],
    ) -> Result[T | U, F | TechnicalErrorDetails]: ...

    @abstractmethod
    def or_else_catch(
        self, f: Callable[[E], Result[U, F]], failure_factory: ErrorResultFactory,
    ) -> Result[T | U, Any]: ...


# ═════════════════════════════════════════════════════════════════════════════
# Success
# ═════════════════════════════════════════════════════════════════════════════


class Success(Result[T, Never]):
    """Successful outcome holding exactly one value."""

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    discriminant_tag = ResultTag.SUCCESS
    is_success = True
    is_failure = False

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @property
    def error_details(self) -> None:
        return None

    def to_tuple(self) -> tuple[T, None]:
        return (self._value, None)

    def to_void_result(self) -> Success[None]:
        return Success(None)

    def value_or_none(self) -> T:
        return self._value

    def value_or_default(self, default: object) -> T:
        return self._value

    def value_or_else(self, on_failure: Callable[[Never], object]) -> T:
        return self._value

    def value_or_raise(self, exception_factory: Callable[[Never], BaseException]) -> T:
        return self._value

    def error_details_or_none(self) -> None:
        return None

    def error_details_or_default(self, default: R) -> R:
        return default

    def error_details_or_else(self, on_success: Callable[[], R]) -> R:
        return on_success()

    def error_details_or_raise(self, exception_factory: Callable[[], BaseException]) -> Never:
        raise exception_factory()

    def fold(self, on_success: Callable[[T], U], on_failure: Callable[[Never], object]) -> U:
        return on_success(self._value)

    def fold_catch_default(
        self,
        log_props: LogPropertiesLike,
        on_success: Callable[[T], U],
        on_failure: Callable[[Never], object],
    ) -> U | Failure[TechnicalErrorDetails]:
        try:
            return on_success(self._value)
        except Exception as exc:
            return _unexpected(log_props, exc)

    def fold_catch(
        self,
        on_success: Callable[[T], U],
        failure_factory: Callable[[Exception], Failure[F]],
        on_failure: Callable[[Never], object],
    ) -> U | Failure[F]:
        try:
            return on_success(self._value)
        except Exception as exc:
            return failure_factory(exc)

    def map(self, f: Callable[[T], U]) -> Success[U]:
        return Success(f(self._value))

    def map_catch_default(self, log_props: LogPropertiesLike, f: Callable[[T], U]) -> Result[U, TechnicalErrorDetails]:
        try:
            return Success(f(self._value))
        except Exception as exc:
            return _unexpected(log_props, exc)

    def map_catch(self, f: Callable[[T], U], failure_factory: Callable[[Exception], Failure[F]]) -> Result[U, F]:
        try:
            return Success(f(self._value))
        except Exception as exc:
            return failure_factory(exc)

    def map_error(self, f: Callable[[Never], F]) -> Success[T]:
        return self

    def and_then(self, f: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return f(self._value)

    def and_then_catch_default(
        self, log_props: LogPropertiesLike, f: Callable[[T], Result[U, F]],
    ) -> Result[U, F | TechnicalErrorDetails]:
        try:
            return f(self._value)
        except Exception as exc:
            return _unexpected(log_props, exc)

    def and_then_catch(self, f: Callable[[T], Result[U, F]], failure_factory: ErrorResultFactory) -> Result[U, Any]:
        try:
            return f(self._value)
        except Exception as exc:
            return failure_factory(exc)

    def or_else(self, f: Callable[[Never], Result[U, F]]) -> Success[T]:
        return self

    def or_else_catch_default(self, log_props: LogPropertiesLike, f: Callable[[Never], Result[U, F]]) -> Success[T]:
        return self

    def or_else_catch(self, f: Callable[[Never], Result[U, F]], failure_factory: ErrorResultFactory) -> Success[T]:
        return self

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and self._value == other._value

    def __hash__(self) -> int:
        return hash((ResultTag.SUCCESS, self._value))

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __iter__(self) -> Iterator[T]:
        """Yields the value once."""
        yield self._value


# ═════════════════════════════════════════════════════════════════════════════
# Failure
# ═════════════════════════════════════════════════════════════════════════════


class Failure(Result[Never, E]):
    """Failed outcome holding exactly one ErrorDetails instance."""

    __slots__ = ("_error_details",)
    __match_args__ = ("error_details",)

    discriminant_tag = ResultTag.FAILURE
    is_success = False
    is_failure = True

    def __init__(self, error_details: E) -> None:
        self._error_details = error_details

    @property
    def error_details(self) -> E:
        return self._error_details

    def to_tuple(self) -> tuple[None, E]:
        return (None, self._error_details)

    def to_void_result(self) -> Failure[E]:
        return self

    def value_or_none(self) -> None:
        return None

    def value_or_default(self, default: R) -> R:
        return default

    def value_or_else(self, on_failure: Callable[[E], R]) -> R:
        return on_failure(self._error_details)

    def value_or_raise(self, exception_factory: Callable[[E], BaseException]) -> Never:
        raise exception_factory(self._error_details)

    def error_details_or_none(self) -> E:
        return self._error_details

    def error_details_or_default(self, default: object) -> E:
        return self._error_details

    def error_details_or_else(self, on_success: Callable[[], object]) -> E:
        return self._error_details

    def error_details_or_raise(self, exception_factory: Callable[[], BaseException]) -> E:
        return self._error_details

    def fold(self, on_success: Callable[[Never], object], on_failure: Callable[[E], R]) -> R:
        return on_failure(self._error_details)

    def fold_catch_default(
        self,
        log_props: LogPropertiesLike,
        on_success: Callable[[Never], object],
        on_failure: Callable[[E], R],
    ) -> R:
        return on_failure(self._error_details)

    def fold_catch(
        self,
        on_success: Callable[[Never], object],
        failure_factory: Callable[[Exception], Failure[F]],
        on_failure: Callable[[E], R],
    ) -> R:
        return on_failure(self._error_details)

    def map(self, f: Callable[[Never], U]) -> Failure[E]:
        return self

    def map_catch_default(self, log_props: LogPropertiesLike, f: Callable[[Never], U]) -> Failure[E]:
        return self

    def map_catch(self, f: Callable[[Never], U], failure_factory: Callable[[Exception], Failure[F]]) -> Failure[E]:
        return self

    def map_error(self, f: Callable[[E], F]) -> Failure[F]:
        return Failure(f(self._error_details))

    def and_then(self, f: Callable[[Never], Result[U, F]]) -> Failure[E]:
        return self

    def and_then_catch_default(self, log_props: LogPropertiesLike, f: Callable[[Never], Result[U, F]]) -> Failure[E]:
        return self

    def and_then_catch(self, f: Callable[[Never], Result[U, F]], failure_factory: ErrorResultFactory) -> Failure[E]:
        return self

    def or_else(self, f: Callable[[E], Result[U, F]]) -> Result[U, F]:
        return f(self._error_details)

    def or_else_catch_default(
        self, log_props: LogPropertiesLike, f: Callable[[E], Result[U, F]],
    ) -> Result[U, F | TechnicalErrorDetails]:
        try:
            return f(self._error_details)
        except Exception as exc:
            return _unexpected(log_props, exc)

    def or_else_catch(self, f: Callable[[E], Result[U, F]], failure_factory: ErrorResultFactory) -> Result[U, Any]:
        try:
            return f(self._error_details)
        except Exception as exc:
            return failure_factory(exc)

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure) and self._error_details is other._error_details

    def __hash__(self) -> int:
        return hash((ResultTag.FAILURE, id(self._error_details)))

    def __repr__(self) -> str:
        return f"Failure({self._error_details!r})"

    def __iter__(self) -> Iterator[Never]:
        """Yields nothing."""
        return iter(())


# ═════════════════════════════════════════════════════════════════════════════
# Aliases & Helpers
# ═════════════════════════════════════════════════════════════════════════════

AsyncResult: TypeAlias = Awaitable[Result[T, E]]
ApiResult: TypeAlias = Result[T, ApiErrorDetails]


def _unexpected(log_props: LogPropertiesLike, exc: Exception) -> Failure[TechnicalErrorDetails]:
    """Log an unexpected callback exception and wrap it as a technical Failure."""
    from .factory import technical_error
    return technical_error(log_props, UNEXPECTED_ERROR_CODE, exc)


def sequence(results: list[Result[T, E]]) -> Result[list[T], E]:
    """list[Result[T, E]] -> Result[list[T], E]. Returns the first Failure unchanged."""
    values: list[T] = []
    for r in results:
        if r.is_failure:
            return cast("Failure[E]", r)
        values.append(cast("Success[T]", r).value)
    return Success(values)


def traverse(items: list[U], f: Callable[[U], Result[T, E]]) -> Result[list[T], E]:
    """Map ``f`` over items and sequence. Stops calling ``f`` at the first Failure."""
    values: list[T] = []
    for item in items:
        r = f(item)
        if r.is_failure:
            return cast("Failure[E]", r)
        values.append(cast("Success[T]", r).value)
    return Success(values)
