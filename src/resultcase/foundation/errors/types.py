"""Type aliases and caller-context models shared by results and logging.

Uses Pydantic models for validation/serialization. Callers may pass either a
model instance or a plain mapping wherever log properties are accepted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

# Ordered call-site chain, outermost first: ("Domain", "App", "Service", "op")
CallerContext: TypeAlias = tuple[str, ...]


def coerce_caller_context(v: object) -> object:
    """Accept a bare string as a one-element chain."""
    return (v,) if isinstance(v, str) else v


# ═══════════════════════════════════════════════════════════════════════════════
# Log Properties
# ═══════════════════════════════════════════════════════════════════════════════


class LogProperties(BaseModel):
    """Core properties attached to a log entry and to an error's details.

    Attributes:
        context: Call-site chain identifying where the entry originated
        error_instance_id: Support reference identifier
        correlation_id: Cross-system correlation token
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        json_schema_extra={
            "title": "Log Properties",
            "examples": [{"context": ["Billing", "Invoices", "create"], "correlation_id": "req-81f2"}],
        },
    )

    context: CallerContext | None = None
    error_instance_id: str | None = None
    correlation_id: str | None = None

    @field_validator("context", mode="before")
    @classmethod
    def _coerce_context(cls, v: object) -> object:
        return coerce_caller_context(v)

    def with_context_prefix(self, prefix: str) -> LogProperties:
        """Return a copy whose context chain starts with ``prefix``."""
        return self.model_copy(update={"context": (prefix, *(self.context or ()))})


class FactoryOptions(LogProperties):
    """Options accepted by the failure factory functions.

    ``log=False`` suppresses the log entry the factory would otherwise emit.
    """

    log: bool = True


class ApiErrorOptions(BaseModel):
    """Options for API error details. Message and instance id come from the response."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    context: CallerContext | None = None
    error_code: str | None = None
    correlation_id: str | None = None
    log: bool = True

    @field_validator("context", mode="before")
    @classmethod
    def _coerce_context(cls, v: object) -> object:
        return coerce_caller_context(v)

    def log_properties(self) -> LogProperties:
        """Project onto the properties a logger understands."""
        return LogProperties.model_construct(context=self.context, error_instance_id=None,
                                             correlation_id=self.correlation_id)


LogPropertiesLike: TypeAlias = "LogProperties | Mapping[str, Any] | None"
FactoryOptionsLike: TypeAlias = "FactoryOptions | LogProperties | Mapping[str, Any] | None"
ApiErrorOptionsLike: TypeAlias = "ApiErrorOptions | Mapping[str, Any] | None"

# ═══════════════════════════════════════════════════════════════════════════════
# Coercion Helpers
# ═══════════════════════════════════════════════════════════════════════════════

_LogPropertiesAdapter: TypeAdapter[LogProperties] = TypeAdapter(LogProperties)
_FactoryOptionsAdapter: TypeAdapter[FactoryOptions] = TypeAdapter(FactoryOptions)
_ApiErrorOptionsAdapter: TypeAdapter[ApiErrorOptions] = TypeAdapter(ApiErrorOptions)

_EMPTY_PROPERTIES = LogProperties()


def log_properties(value: LogPropertiesLike = None) -> LogProperties:
    """Coerce a mapping/None/model into LogProperties."""
    if value is None:
        return _EMPTY_PROPERTIES
    if isinstance(value, LogProperties):
        return value
    return _LogPropertiesAdapter.validate_python(dict(value))


def factory_options(value: FactoryOptionsLike = None) -> FactoryOptions:
    """Coerce a mapping/None/model into FactoryOptions (``log`` defaults to True)."""
    if value is None:
        return FactoryOptions()
    if isinstance(value, FactoryOptions):
        return value
    if isinstance(value, LogProperties):
        return FactoryOptions.model_construct(**value.model_dump(), log=True)
    return _FactoryOptionsAdapter.validate_python(dict(value))


def api_error_options(value: ApiErrorOptionsLike = None) -> ApiErrorOptions:
    """Coerce a mapping/None/model into ApiErrorOptions."""
    if value is None:
        return ApiErrorOptions()
    if isinstance(value, ApiErrorOptions):
        return value
    return _ApiErrorOptionsAdapter.validate_python(dict(value))
