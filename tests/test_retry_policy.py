"""
Retry Policy Tests
Validates the exact backoff progression (2 -> 4 -> 8 time units), the attempt
budget and which failures are retried at all.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from unified_payments.exceptions import (
    TransportConnectionError,
    TransportTimeoutError,
    ValidationError,
)
from unified_payments.models import RawResponse, RetryState
from unified_payments.services.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)


def failing_then(failures, result):
    """Operation that raises each scripted failure once, then returns result"""
    operation = AsyncMock(side_effect=list(failures) + [result])
    return operation


def slept_delays(sleep_mock):
    return [call.args[0] for call in sleep_mock.await_args_list]


class TestRetryState:

    def test_delay_progression(self):
        state = RetryState(max_attempts=4)
        delays = []
        while not state.exhausted:
            delays.append(state.next_delay())
            state.advance()

        assert delays == [2, 4, 8]

    def test_time_unit_scales_delays(self):
        assert RetryState(max_attempts=3).next_delay(0.5) == 1.0

    def test_single_attempt_is_exhausted_immediately(self):
        assert RetryState(max_attempts=1).exhausted


class TestRetryPolicy:

    @pytest.mark.asyncio
    async def test_success_first_try_never_sleeps(self, instant_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=instant_sleep)
        operation = AsyncMock(return_value="ok")

        assert await policy.run(operation) == "ok"
        assert operation.await_count == 1
        instant_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failures", [1, 2])
    async def test_recovers_after_transient_failures(self, instant_sleep, failures):
        policy = RetryPolicy(max_attempts=3, sleep=instant_sleep)
        operation = failing_then([TransportTimeoutError("slow")] * failures, "ok")

        assert await policy.run(operation) == "ok"
        assert operation.await_count == failures + 1
        assert slept_delays(instant_sleep) == [2, 4][:failures]
        logger.info(f"✅ Recovery after {failures} transient failure(s) validated")

    @pytest.mark.asyncio
    async def test_delays_strictly_increase(self, instant_sleep):
        policy = RetryPolicy(max_attempts=5, sleep=instant_sleep)
        operation = failing_then([TransportConnectionError("refused")] * 4, "ok")

        await policy.run(operation)

        delays = slept_delays(instant_sleep)
        assert delays == [2, 4, 8, 16]
        assert all(earlier < later for earlier, later in zip(delays, delays[1:]))

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, instant_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=instant_sleep)
        operation = AsyncMock(side_effect=TransportConnectionError("refused"))

        with pytest.raises(TransportConnectionError):
            await policy.run(operation)

        assert operation.await_count == 3
        assert slept_delays(instant_sleep) == [2, 4]

    @pytest.mark.asyncio
    async def test_single_attempt_never_retries(self, instant_sleep):
        policy = RetryPolicy(max_attempts=1, sleep=instant_sleep)
        operation = AsyncMock(side_effect=TransportTimeoutError("slow"))

        with pytest.raises(TransportTimeoutError):
            await policy.run(operation)

        assert operation.await_count == 1
        instant_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_server_error_response_is_not_retried(self, instant_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=instant_sleep)
        response = RawResponse(status=503, body="unavailable")
        operation = AsyncMock(return_value=response)

        assert await policy.run(operation) is response
        assert operation.await_count == 1
        instant_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_transient_errors_propagate_immediately(self, instant_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=instant_sleep)
        operation = AsyncMock(side_effect=ValidationError("bad"))

        with pytest.raises(ValidationError):
            await policy.run(operation)

        assert operation.await_count == 1
        instant_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_time_unit_is_applied(self, instant_sleep):
        policy = RetryPolicy(max_attempts=3, time_unit=0.25, sleep=instant_sleep)
        operation = failing_then([TransportTimeoutError("slow")] * 2, "ok")

        await policy.run(operation)

        assert slept_delays(instant_sleep) == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_retry_is_logged(self, instant_sleep, caplog):
        policy = RetryPolicy(max_attempts=2, sleep=instant_sleep)
        operation = failing_then([TransportTimeoutError("slow")], "ok")

        with caplog.at_level(logging.INFO):
            await policy.run(operation, description="kamoney GET /private/wallet")

        messages = [record.getMessage() for record in caplog.records]
        assert any("API_RETRY" in message and "kamoney GET /private/wallet" in message for message in messages)
        assert any("API_RECOVERED" in message for message in messages)

    @pytest.mark.parametrize("max_attempts", [0, -1])
    def test_rejects_non_positive_attempts(self, max_attempts):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=max_attempts)

    def test_backoff_delays(self):
        assert RetryPolicy(max_attempts=3).backoff_delays() == [2, 4]
        assert RetryPolicy(max_attempts=1).backoff_delays() == []

    def test_worst_case_duration(self):
        assert RetryPolicy(max_attempts=3).worst_case_duration(timeout=30) == 30 * 3 + 2 + 4
