"""Exception types and error utilities.

Provides the assertion marker exception recognized by the result factory,
support reference id generation, and stable stringification of any caught
value (exceptions do not serialize their own fields, so they are rendered
explicitly).
"""

from __future__ import annotations

import secrets
import traceback
from typing import TYPE_CHECKING, Any, NoReturn

import orjson
from pydantic import BaseModel

if TYPE_CHECKING:
    from resultcase.observability import ResultLogger

    from .types import LogProperties


_ERROR_INSTANCE_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


class AssertionFailedError(AssertionError):
    """Raised when a logic guard or precondition fails.

    This is a defect that should not occur during normal operation. The result
    factory classifies it as an assertion failure rather than a technical one.
    Prefer ``throw_assertion_failed_error()``, which also logs.
    """

    @classmethod
    def is_instance(cls, value: object) -> bool:
        return isinstance(value, cls)


class UnreachableError(Exception):
    """Raised from code paths that static analysis cannot prove unreachable."""

    @classmethod
    def is_instance(cls, value: object) -> bool:
        return isinstance(value, cls)


def create_error_instance_id() -> str:
    """Random support reference id, e.g. ``AB3K-9XQ1``."""
    chars = [secrets.choice(_ERROR_INSTANCE_ID_ALPHABET) for _ in range(8)]
    return f"{''.join(chars[:4])}-{''.join(chars[4:])}"


# ─────────────────────────────────────────────────────────────────────────────
# Stringification
# ─────────────────────────────────────────────────────────────────────────────


def _exception_fields(exc: BaseException, seen: frozenset[int] = frozenset()) -> dict[str, Any]:
    """Message/name/stack/cause of ``exc``. A cause already in the chain renders as its ``str()``."""
    seen = seen | {id(exc)}
    stack = "".join(traceback.format_exception(exc)) if exc.__traceback__ else None
    cause = exc.__cause__
    if cause is not None and id(cause) in seen:
        rendered_cause: Any = str(cause)
    else:
        rendered_cause = _exception_fields(cause, seen) if cause is not None else None
    return {
        "message": str(exc),
        "name": type(exc).__name__,
        "stack": stack,
        "cause": rendered_cause,
    }


def _default(value: Any) -> Any:
    """orjson fallback for types it does not serialize natively."""
    if isinstance(value, BaseException):
        return _exception_fields(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError


def to_error_string(error: object) -> str:
    """Convert a caught value into a stable string.

    Strings pass through unchanged. Exceptions are rendered as JSON of their
    message/name/stack/cause. Anything else is JSON-serialized, falling back to
    ``str()`` when serialization fails (circular references, opaque objects).
    """
    if isinstance(error, str):
        return error
    try:
        if isinstance(error, BaseException):
            return orjson.dumps(_exception_fields(error), default=_default).decode()
        return orjson.dumps(error, default=_default, option=orjson.OPT_NON_STR_KEYS).decode()
    except (orjson.JSONEncodeError, RecursionError):
        return str(error)


# ─────────────────────────────────────────────────────────────────────────────
# Raising Helpers
# ─────────────────────────────────────────────────────────────────────────────


def throw_unreachable_error() -> NoReturn:
    """Signal a code path that must never execute."""
    raise UnreachableError()


def throw_assertion_failed_error(
    context: str | LogProperties,
    message: object = None,
    *params: object,
    logger: ResultLogger | None = None,
) -> NoReturn:
    """Log an assertion failure, then raise AssertionFailedError.

    The raised message is ``"<formatted context> - <message>"`` with any extra
    params appended as ``" - <params>"``.
    """
    from resultcase.observability import format_log_properties_context, get_logger

    (logger or get_logger()).assertion_failed(context, message, *params)

    formatted = f"{format_log_properties_context(context)} - {to_error_string(message)}"
    if params:
        formatted += f" - {to_error_string(list(params))}"
    raise AssertionFailedError(formatted)
