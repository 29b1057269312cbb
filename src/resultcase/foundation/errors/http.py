"""HTTP API error response shapes.

ApiErrorDetails only needs ``title``, ``detail`` and ``instance`` to be
addressable, so any of these (or a plain mapping) can be plugged in.
"""

from __future__ import annotations

from http import HTTPStatus

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 9457 problem details. Extension members are preserved verbatim."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        json_schema_extra={
            "title": "Problem Details",
            "examples": [{
                "type": "https://example.com/probs/out-of-credit",
                "title": "You do not have enough credit.",
                "status": 403,
                "detail": "Your current balance is 30, but that costs 50.",
                "instance": "/account/12345/msgs/abc",
            }],
        },
    )

    type: str = "about:blank"
    title: str | None = None
    status: HTTPStatus | int | None = None
    detail: str | None = None
    instance: str | None = None


class ValidationProblemDetails(ProblemDetails):
    """ASP.NET Core style problem details with per-field validation errors."""

    errors: dict[str, list[str]] | None = None


class NestHttpErrorResponse(BaseModel):
    """Error body produced by NestJS HttpException."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    status_code: HTTPStatus | int = Field(alias="statusCode")
    message: str | list[str] | int
    error: str | None = None


# Customize to your API's error shape.
StandardApiErrorResponse = ProblemDetails
