"""Structured error details carried by a Failure.

The hierarchy is closed: every concrete variant declares a unique
discriminant tag as a class keyword, and tags are registered while the class
statement executes. A duplicate tag raises ``TypeError`` at import time, so a
conflicting custom variant can never be loaded.

Adding a custom variant:
    >>> class PaymentDeclinedErrorDetails(ErrorDetails, tag="PaymentDeclinedError"):
    ...     '''Card issuer refused the charge.'''
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar

from resultcase.foundation.errors import (
    ApiErrorOptionsLike,
    CallerContext,
    api_error_options,
    coerce_caller_context,
    create_error_instance_id,
)
from resultcase.observability import format_caller_context

DEFAULT_ERROR_MESSAGE = "Sorry, something went wrong."


class StandardErrorTag(StrEnum):
    """Discriminant tags of the built-in error details variants."""

    API_ERROR = "ApiError"
    ASSERTION_FAILED_ERROR = "AssertionFailedError"
    SHORT_CIRCUITED_ERROR = "ShortCircuitedError"
    TECHNICAL_ERROR = "TechnicalError"
    USER_ERROR = "UserError"


# tag -> variant class; standard and custom variants share one namespace
_TAG_REGISTRY: dict[str, type[ErrorDetails]] = {}


def registered_tags() -> frozenset[str]:
    """All discriminant tags currently registered."""
    return frozenset(_TAG_REGISTRY)


def variant_for_tag(tag: str) -> type[ErrorDetails] | None:
    """Look up the variant class registered for ``tag``."""
    return _TAG_REGISTRY.get(tag)


class ErrorDetails:
    """Abstract base for all error details variants.

    All constructor fields are optional. A missing message falls back to a
    generic one, and a missing instance id is generated once on first access.

    Attributes:
        context: Call-site chain, outermost first
        error_code: Short caller-supplied identifier
        error_message: Human-readable description
        error_instance_id: Support reference identifier
        correlation_id: Cross-system correlation token
    """

    __slots__ = ("_context", "_error_code", "_error_message", "_error_instance_id", "_correlation_id", "_id_lock")

    discriminant_tag: ClassVar[str]

    def __init_subclass__(cls, tag: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if tag is None:
            # Intermediate base; concrete variants must declare a tag
            return
        if (existing := _TAG_REGISTRY.get(tag)) is not None:
            raise TypeError(
                f"Duplicate error details tag {tag!r}: {cls.__qualname__} conflicts with {existing.__qualname__}"
            )
        _TAG_REGISTRY[tag] = cls
        cls.discriminant_tag = tag

    def __init__(
        self,
        *,
        context: CallerContext | list[str] | str | None = None,
        error_code: str | None = None,
        error_message: str | None = None,
        error_instance_id: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        if not hasattr(type(self), "discriminant_tag"):
            raise TypeError(f"{type(self).__qualname__} has no discriminant tag; declare one with tag=...")
        self._context = tuple(coerce_caller_context(context)) if context is not None else None  # type: ignore[arg-type]
        self._error_code = error_code
        self._error_message = error_message
        self._error_instance_id = error_instance_id
        self._correlation_id = correlation_id
        self._id_lock = threading.Lock()

    @classmethod
    def is_instance(cls, value: object) -> bool:
        """True only for this exact variant (tag match, not subclass match)."""
        if (tag := getattr(cls, "discriminant_tag", None)) is None:
            return isinstance(value, cls)
        return isinstance(value, ErrorDetails) and value.discriminant_tag == tag

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def context(self) -> CallerContext | None:
        return self._context

    @property
    def error_code(self) -> str | None:
        return self._error_code

    @property
    def error_message(self) -> str:
        return self._error_message if self._error_message is not None else DEFAULT_ERROR_MESSAGE

    @property
    def error_instance_id(self) -> str:
        """Support reference id; generated once and memoized when not supplied."""
        if self._error_instance_id is None:
            with self._id_lock:
                if self._error_instance_id is None:
                    self._error_instance_id = create_error_instance_id()
        return self._error_instance_id

    @property
    def correlation_id(self) -> str | None:
        return self._correlation_id

    def format_error_result(self) -> str:
        """``"<context> - <code> - <message>"``, e.g. ``"Billing.charge - TE - boom"``."""
        code = "" if self._error_code is None else str(self._error_code)
        return f"{format_caller_context(self._context)} - {code} - {self.error_message}"

    def __str__(self) -> str:
        return self.format_error_result()

    def __repr__(self) -> str:
        return f"{self.name}(code={self._error_code!r}, message={self.error_message!r}, context={self._context!r})"


# ═════════════════════════════════════════════════════════════════════════════
# Standard Variants
# ═════════════════════════════════════════════════════════════════════════════


class AssertionFailedErrorDetails(ErrorDetails, tag=StandardErrorTag.ASSERTION_FAILED_ERROR):
    """A logic guard or precondition failed. Indicates a defect."""

    __slots__ = ()


class TechnicalErrorDetails(ErrorDetails, tag=StandardErrorTag.TECHNICAL_ERROR):
    """Unexpected runtime failure (caught exception, I/O failure, etc.)."""

    __slots__ = ()


class UserErrorDetails(ErrorDetails, tag=StandardErrorTag.USER_ERROR):
    """Expected, user-facing validation or business-rule rejection."""

    __slots__ = ()


class ShortCircuitedErrorDetails(ErrorDetails, tag=StandardErrorTag.SHORT_CIRCUITED_ERROR):
    """Intentional early exit for an expected reason, not a defect."""

    __slots__ = ()


class ApiErrorDetails(ErrorDetails, tag=StandardErrorTag.API_ERROR):
    """Failure surfaced by an external API.

    The message comes from the response ``title`` (falling back to ``detail``)
    and the instance id from its ``instance`` member. The response is kept
    as-is and exposed through ``error_response``.
    """

    __slots__ = ("_error_response",)

    def __init__(self, response: object, options: ApiErrorOptionsLike = None) -> None:
        opts = api_error_options(options)
        title = _member(response, "title")
        super().__init__(
            context=opts.context,
            error_code=opts.error_code,
            error_message=title if title is not None else _member(response, "detail"),
            error_instance_id=_member(response, "instance"),
            correlation_id=opts.correlation_id,
        )
        self._error_response = response

    @property
    def error_response(self) -> object:
        return self._error_response


def _member(response: object, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-bearing response."""
    if isinstance(response, Mapping):
        return response.get(name)
    return getattr(response, name, None)


AllErrorDetails = (
    ApiErrorDetails
    | AssertionFailedErrorDetails
    | ShortCircuitedErrorDetails
    | TechnicalErrorDetails
    | UserErrorDetails
)
