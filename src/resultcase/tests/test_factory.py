"""Tests for the result factory facade and exception adapters."""

from __future__ import annotations

import asyncio
import inspect

import pytest

from resultcase import (
    AssertionFailedError,
    Failure,
    ProblemDetails,
    ResultFactory,
    Success,
    TechnicalErrorDetails,
    UserErrorDetails,
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
from resultcase.foundation.errors import LogProperties
from resultcase.testing import RecordingLogger

CTX = {"context": ["Orders", "submit"], "correlation_id": "req-42"}


def to_user_failure(exc: Exception) -> Failure[UserErrorDetails]:
    return Failure(UserErrorDetails(error_code="CAUGHT", error_message=str(exc)))


class TestSuccess:
    def test_success_wraps_without_logging(self, log: RecordingLogger) -> None:
        assert success(5) == Success(5)
        log.assert_not_called()


class TestErrorLevelFactories:
    """Technical and assertion failures log at error level."""

    def test_assertion_failed_error(self, log: RecordingLogger) -> None:
        result = assertion_failed_error({"context": ["X"]}, "AF", "bad")

        assert result.is_assertion_failed_error()
        assert result.error_details.error_code == "AF"
        assert result.error_details.error_message == "bad"
        assert result.error_details.context == ("X",)

        assert len(log.calls_at("error")) == 1
        call = log.calls[0]
        assert call.kind == "assertion_failed"
        assert call.formatted_context == "ResultFactory - AssertionFailedErrorResult.X"
        assert call.message == "bad"
        assert call.params == ("ErrorCode: AF",)

    def test_technical_error_appends_extra_params(self, log: RecordingLogger) -> None:
        result = technical_error(CTX, "DB", "connection refused", {"host": "db-1"}, 3)

        details = result.error_details
        assert details.error_message == 'connection refused - [{"host":"db-1"},3]'
        assert details.correlation_id == "req-42"
        assert details.context == ("Orders", "submit")

        call = log.calls[0]
        assert call.kind == "technical_error"
        assert call.params == ("ErrorCode: DB", {"host": "db-1"}, 3)
        assert call.context.correlation_id == "req-42"
        assert call.context.context == ("ResultFactory - TechnicalErrorResult", "Orders", "submit")

    def test_technical_error_stringifies_exception_message(self) -> None:
        result = technical_error(None, None, RuntimeError("kaput"))
        assert '"message":"kaput"' in result.error_details.error_message
        assert '"name":"RuntimeError"' in result.error_details.error_message

    def test_missing_context_gets_prefix_only(self, log: RecordingLogger) -> None:
        technical_error({}, "X", "m")
        assert log.calls[0].context.context == ("ResultFactory - TechnicalErrorResult",)

    def test_supplied_instance_id_is_kept(self) -> None:
        result = technical_error({"error_instance_id": "ABCD-0000"}, "X", "m")
        assert result.error_details.error_instance_id == "ABCD-0000"

    def test_log_false_suppresses_logging(self, log: RecordingLogger) -> None:
        technical_error({"log": False}, "X", "m")
        assertion_failed_error({"log": False}, "X", "m")
        user_error({"log": False}, "X", "m")
        short_circuited_error({"log": False}, "X", "m")
        log.assert_not_called()

    def test_log_properties_model_is_accepted(self, log: RecordingLogger) -> None:
        props = LogProperties(context="Billing", correlation_id="c-1")
        result = technical_error(props, "X", "m")
        assert result.error_details.context == ("Billing",)
        assert log.calls[0].formatted_context == "ResultFactory - TechnicalErrorResult.Billing"


class TestDebugLevelFactories:
    """User and short-circuited failures are expected, so they log at debug."""

    def test_user_error(self, log: RecordingLogger) -> None:
        result = user_error(CTX, "UNDERAGE", "Must be 18+")
        assert result.is_user_error()
        assert result.error_details.error_message == "Must be 18+"
        assert log.calls_at("error") == []
        call = log.calls_at("debug")[0]
        assert call.formatted_context == "ResultFactory - UserErrorResult.Orders.submit"
        assert call.params == ("ErrorCode: UNDERAGE",)

    def test_short_circuited_error(self, log: RecordingLogger) -> None:
        result = short_circuited_error(CTX, "ALREADY_DONE", "Nothing to do")
        assert result.is_short_circuited_error()
        call = log.calls_at("debug")[0]
        assert call.formatted_context == "ResultFactory - ShortCircuitedErrorResult.Orders.submit"


class TestApiErrors:
    RESPONSE = ProblemDetails(title="Conflict", status=409, instance="INST-1")

    def test_api_error_no_log_never_logs(self, log: RecordingLogger) -> None:
        result = api_error_no_log({"error_code": "CONFLICT"}, self.RESPONSE)
        assert result.is_api_error()
        assert result.error_details.error_message == "Conflict"
        assert result.error_details.error_instance_id == "INST-1"
        log.assert_not_called()

    def test_api_error_logs_response(self, log: RecordingLogger) -> None:
        result = api_error({**CTX, "error_code": "CONFLICT"}, self.RESPONSE)
        assert result.error_details.error_response is self.RESPONSE
        call = log.calls_at("error")[0]
        assert call.kind == "api_error"
        assert call.message is self.RESPONSE
        assert call.params == ("ErrorCode: CONFLICT",)
        assert call.formatted_context == "ResultFactory - ApiErrorResult.Orders.submit"

    def test_api_error_log_false(self, log: RecordingLogger) -> None:
        api_error({"log": False}, {"title": "x"})
        log.assert_not_called()


class TestFromErrorObject:
    """Classification of arbitrary caught values."""

    def test_assertion_marker_becomes_assertion_failure(self, log: RecordingLogger) -> None:
        result = from_error_object(CTX, AssertionFailedError("invariant broken"))
        assert result.is_assertion_failed_error()
        assert result.error_details.error_code is None
        assert "invariant broken" in result.error_details.error_message
        assert log.calls[0].kind == "assertion_failed"

    @pytest.mark.parametrize("caught", [None, "bad", 42, ValueError("x"), AssertionError("plain"), {"a": 1}])
    def test_everything_else_becomes_technical(self, log: RecordingLogger, caught: object) -> None:
        result = from_error_object(CTX, caught)
        assert result.is_technical_error()
        assert log.calls[0].kind == "technical_error"

    def test_string_passes_through_as_message(self) -> None:
        assert from_error_object({}, "bad").error_details.error_message == "bad"


class TestTryCatch:
    def test_try_catch_default_success(self, log: RecordingLogger) -> None:
        assert try_catch_default(CTX, lambda: 1) == Success(1)
        log.assert_not_called()

    def test_try_catch_default_unclassified_exception_is_technical(self) -> None:
        def raise_bad() -> None:
            raise RuntimeError("bad")

        assert try_catch_default({}, raise_bad).is_technical_error()

    def test_try_catch_default_classifies_assertion(self) -> None:
        def guard() -> None:
            raise AssertionFailedError("guard")

        assert try_catch_default({}, guard).is_assertion_failed_error()

    def test_try_catch_default_does_not_catch_base_exceptions(self) -> None:
        def interrupt() -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            try_catch_default({}, interrupt)

    def test_try_catch_delegates_to_factory(self, log: RecordingLogger) -> None:
        result = try_catch(lambda: int("x"), to_user_failure)
        assert result.error_details.error_code == "CAUGHT"
        log.assert_not_called()
        assert try_catch(lambda: 3, to_user_failure) == Success(3)

    @pytest.mark.asyncio
    async def test_try_catch_default_async(self, log: RecordingLogger) -> None:
        async def ok() -> int:
            await asyncio.sleep(0)
            return 7

        async def fail() -> int:
            await asyncio.sleep(0)
            raise ValueError("async boom")

        assert await try_catch_default_async(CTX, ok) == Success(7)
        result = await try_catch_default_async(CTX, fail)
        assert result.is_technical_error()
        assert len(log.calls_at("error")) == 1

    @pytest.mark.asyncio
    async def test_try_catch_async(self, log: RecordingLogger) -> None:
        async def fail() -> int:
            raise ValueError("nope")

        result = await try_catch_async(fail, to_user_failure)
        assert result.error_details.error_message == "nope"
        log.assert_not_called()


class TestWrap:
    def test_wrap_default_forwards_arguments(self) -> None:
        def divide(a: int, b: int = 1) -> float:
            """Divide a by b."""
            return a / b

        safe_divide = wrap_default(CTX, divide)
        assert safe_divide(6, b=3) == Success(2.0)
        assert safe_divide(1, 0).is_technical_error()
        assert safe_divide.__name__ == "divide"
        assert safe_divide.__doc__ == "Divide a by b."

    def test_wrap_uses_failure_factory(self) -> None:
        def parse(s: str) -> int:
            return int(s)

        safe_int = wrap(parse, to_user_failure)
        assert safe_int("5") == Success(5)
        assert safe_int("x").is_user_error()

    @pytest.mark.asyncio
    async def test_wrap_default_async_never_raises(self, log: RecordingLogger) -> None:
        async def explode() -> None:
            raise Exception("x")

        wrapped = wrap_default_async(CTX, explode)
        assert inspect.iscoroutinefunction(wrapped)
        result = await wrapped()
        assert isinstance(result, Failure)
        assert isinstance(result.error_details, TechnicalErrorDetails)
        assert len(log.calls) == 1

    @pytest.mark.asyncio
    async def test_wrap_async(self) -> None:
        async def fetch(n: int) -> int:
            if n < 0:
                raise ValueError("negative")
            return n

        safe_fetch = wrap_async(fetch, to_user_failure)
        assert await safe_fetch(1) == Success(1)
        assert (await safe_fetch(-1)).is_user_error()


class TestInjectedLogger:
    """ResultFactory with an explicit logger bypasses the process-wide one."""

    def test_explicit_logger_receives_calls(self, log: RecordingLogger) -> None:
        own = RecordingLogger()
        factory = ResultFactory(logger=own)

        factory.technical_error(CTX, "X", "m")
        factory.try_catch_default(CTX, lambda: 1 / 0)

        assert own.call_count == 2
        log.assert_not_called()

    def test_default_factory_resolves_logger_at_call_time(self, log: RecordingLogger) -> None:
        from resultcase.observability import set_logger

        replacement = RecordingLogger()
        set_logger(replacement)
        user_error({}, "U", "m")

        assert replacement.call_count == 1
        log.assert_not_called()


class TestCyclicExceptionCauses:
    """Exceptions whose cause chain loops still become Technical Failures."""

    def test_map_catch_default_with_self_cause(self, log: RecordingLogger) -> None:
        def raise_self_caused(_: int) -> int:
            err = ValueError("self-caused")
            raise err from err

        result = Success(1).map_catch_default({}, raise_self_caused)
        assert result.is_technical_error()
        assert "self-caused" in result.error_details.error_message
        assert len(log.calls_at("error")) == 1

    def test_try_catch_default_with_two_exception_cycle(self, log: RecordingLogger) -> None:
        def raise_cycle() -> None:
            a, b = ValueError("a"), RuntimeError("b")
            a.__cause__ = b
            b.__cause__ = a
            raise a

        result = try_catch_default({"context": ["X"]}, raise_cycle)
        assert result.is_technical_error()
        assert result.error_details.context == ("X",)
