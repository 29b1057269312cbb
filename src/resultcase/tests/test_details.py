"""Tests for the error details hierarchy and tag registry."""

from __future__ import annotations

import re
import threading

import pytest

from resultcase.foundation.errors import NestHttpErrorResponse, ProblemDetails, ValidationProblemDetails
from resultcase.results import (
    DEFAULT_ERROR_MESSAGE,
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

INSTANCE_ID = re.compile(r"^[A-Z0-9]{4}-[A-Z0-9]{4}$")


class TestErrorDetailsFields:
    """Constructor fields, defaults and formatting."""

    def test_all_fields_optional(self) -> None:
        details = TechnicalErrorDetails()
        assert details.context is None
        assert details.error_code is None
        assert details.correlation_id is None
        assert details.error_message == DEFAULT_ERROR_MESSAGE

    def test_fields_round_trip(self) -> None:
        details = UserErrorDetails(
            context=["Signup", "validate"],
            error_code="UNDERAGE",
            error_message="Must be 18+",
            error_instance_id="ABCD-1234",
            correlation_id="req-1",
        )
        assert details.context == ("Signup", "validate")
        assert details.error_code == "UNDERAGE"
        assert details.error_message == "Must be 18+"
        assert details.error_instance_id == "ABCD-1234"
        assert details.correlation_id == "req-1"
        assert details.name == "UserErrorDetails"

    def test_empty_message_is_kept(self) -> None:
        assert UserErrorDetails(error_message="").error_message == ""

    def test_format_error_result(self) -> None:
        details = TechnicalErrorDetails(context=["Domain", "App", "Service", "op"], error_code="TE",
                                        error_message="boom")
        assert details.format_error_result() == "Domain.App.Service.op - TE - boom"
        assert str(details) == "Domain.App.Service.op - TE - boom"

    def test_format_error_result_without_context_or_code(self) -> None:
        details = TechnicalErrorDetails(error_message="boom")
        assert details.format_error_result() == "UNKNOWN CONTEXT -  - boom"

    def test_bare_string_context_is_a_single_segment(self) -> None:
        details = TechnicalErrorDetails(context="Billing", error_code="X", error_message="m")
        assert details.context == ("Billing",)
        assert details.format_error_result() == "Billing - X - m"


class TestErrorInstanceId:
    """Lazily generated support reference id."""

    def test_generated_id_is_stable(self) -> None:
        details = TechnicalErrorDetails()
        first = details.error_instance_id
        assert INSTANCE_ID.match(first)
        assert details.error_instance_id == first

    def test_distinct_instances_get_distinct_ids(self) -> None:
        ids = {TechnicalErrorDetails().error_instance_id for _ in range(50)}
        assert len(ids) == 50

    def test_concurrent_first_access_observes_one_id(self) -> None:
        details = TechnicalErrorDetails()
        seen: list[str] = []
        barrier = threading.Barrier(8)

        def read() -> None:
            barrier.wait()
            seen.append(details.error_instance_id)

        threads = [threading.Thread(target=read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(seen)) == 1


class TestVariants:
    """Tag discrimination between standard variants."""

    @pytest.mark.parametrize(
        ("variant", "tag"),
        [
            (ApiErrorDetails, StandardErrorTag.API_ERROR),
            (AssertionFailedErrorDetails, StandardErrorTag.ASSERTION_FAILED_ERROR),
            (ShortCircuitedErrorDetails, StandardErrorTag.SHORT_CIRCUITED_ERROR),
            (TechnicalErrorDetails, StandardErrorTag.TECHNICAL_ERROR),
            (UserErrorDetails, StandardErrorTag.USER_ERROR),
        ],
    )
    def test_discriminant_tags(self, variant: type[ErrorDetails], tag: StandardErrorTag) -> None:
        assert variant.discriminant_tag == tag
        assert variant_for_tag(tag) is variant
        assert tag in registered_tags()

    def test_is_instance_matches_exact_variant_only(self) -> None:
        user = UserErrorDetails()
        assert UserErrorDetails.is_instance(user)
        assert not TechnicalErrorDetails.is_instance(user)
        assert not UserErrorDetails.is_instance("UserError")
        assert not UserErrorDetails.is_instance(None)

    def test_base_is_instance_accepts_any_variant(self) -> None:
        assert ErrorDetails.is_instance(ShortCircuitedErrorDetails())
        assert not ErrorDetails.is_instance(object())

    def test_base_class_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError, match="no discriminant tag"):
            ErrorDetails()


class TestTagRegistry:
    """Custom variants and duplicate-tag detection."""

    def test_custom_variant_registers(self) -> None:
        class PaymentDeclinedErrorDetails(ErrorDetails, tag="PaymentDeclinedError"):
            __slots__ = ()

        details = PaymentDeclinedErrorDetails(error_code="CARD")
        assert details.discriminant_tag == "PaymentDeclinedError"
        assert "PaymentDeclinedError" in registered_tags()
        assert PaymentDeclinedErrorDetails.is_instance(details)
        assert not UserErrorDetails.is_instance(details)

    @pytest.mark.parametrize("tag", list(StandardErrorTag))
    def test_duplicate_standard_tag_fails_at_class_creation(self, tag: StandardErrorTag) -> None:
        with pytest.raises(TypeError, match="Duplicate error details tag"):
            class Impostor(ErrorDetails, tag=tag):  # noqa: F841
                pass

        assert variant_for_tag(tag).__name__ != "Impostor"

    def test_duplicate_custom_tag_fails(self) -> None:
        class QuotaExceededErrorDetails(ErrorDetails, tag="QuotaExceededError"):
            pass

        with pytest.raises(TypeError, match="QuotaExceededError"):
            class AnotherQuota(ErrorDetails, tag="QuotaExceededError"):  # noqa: F841
                pass

        assert variant_for_tag("QuotaExceededError") is QuotaExceededErrorDetails


class TestApiErrorDetails:
    """Message and instance id derived from the API response."""

    def test_from_problem_details_model(self) -> None:
        response = ProblemDetails(title="Not Found", status=404, detail="No order 7", instance="ORD-7",
                                  trace_id="abc")
        details = ApiErrorDetails(response, {"context": ["Orders", "get"], "error_code": "NOT_FOUND",
                                             "correlation_id": "req-9"})
        assert details.error_message == "Not Found"
        assert details.error_instance_id == "ORD-7"
        assert details.error_code == "NOT_FOUND"
        assert details.context == ("Orders", "get")
        assert details.correlation_id == "req-9"
        assert details.error_response is response
        assert details.error_response.model_extra == {"trace_id": "abc"}

    def test_falls_back_to_detail(self) -> None:
        details = ApiErrorDetails({"detail": "Only detail"})
        assert details.error_message == "Only detail"

    def test_missing_title_and_detail_uses_default_message(self) -> None:
        details = ApiErrorDetails({"status": 500})
        assert details.error_message == DEFAULT_ERROR_MESSAGE
        assert INSTANCE_ID.match(details.error_instance_id)

    def test_validation_problem_details(self) -> None:
        response = ValidationProblemDetails(title="Invalid", status=400, errors={"email": ["required"]})
        details = ApiErrorDetails(response)
        assert details.error_message == "Invalid"
        assert details.error_response.errors == {"email": ["required"]}

    def test_nest_error_response_has_no_title(self) -> None:
        response = NestHttpErrorResponse.model_validate({"statusCode": 400, "message": "bad", "error": "Bad Request"})
        details = ApiErrorDetails(response)
        assert response.status_code == 400
        assert details.error_message == DEFAULT_ERROR_MESSAGE
