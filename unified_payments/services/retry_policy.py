"""
Retry Policy for Provider Requests
Retries transport failures that never produced a response, with exponential backoff.

Any received HTTP response ends the loop, including 4xx/5xx: status handling
belongs to the response classifier and 5xx responses are not retried here.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, TypeVar

from unified_payments.exceptions import TransientTransportError
from unified_payments.models import RetryState

T = TypeVar("T")


class RetryPolicy:
    """
    Bounded retry with 2^(attempt+1) backoff

    Attempt 0 fails -> wait 2 units, attempt 1 fails -> wait 4 units, ...
    until max_attempts requests have been made.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        time_unit: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self.max_attempts = max_attempts
        self.time_unit = time_unit
        self._sleep = sleep
        self.logger = logger or logging.getLogger(__name__)

    def backoff_delays(self):
        """Every delay a call can wait through, in order"""
        state = RetryState(max_attempts=self.max_attempts)
        delays = []
        while not state.exhausted:
            delays.append(state.next_delay(self.time_unit))
            state.advance()
        return delays

    def worst_case_duration(self, timeout: float) -> float:
        """
        Upper bound on one logical call: every attempt times out, every backoff is slept

        Bounds how long the caller waits, not how long work runs. A cancelled
        RequestsTransport attempt releases the caller at once, but its worker
        thread keeps the blocking request open for up to one more timeout.
        """
        return timeout * self.max_attempts + sum(self.backoff_delays())

    async def run(self, operation: Callable[[], Awaitable[T]], description: str = "request") -> T:
        """Invoke operation until it returns, fails terminally or the attempts run out"""
        state = RetryState(max_attempts=self.max_attempts)
        operation_start = time.monotonic()

        while True:
            try:
                result = await operation()
            except TransientTransportError as e:
                if state.exhausted:
                    elapsed = time.monotonic() - operation_start
                    self.logger.error(
                        f"❌ API_MAX_RETRIES: {description} failed after {state.attempt + 1} attempt(s) "
                        f"in {elapsed:.3f}s: {e}",
                        extra={"attempt": state.attempt + 1, "max_attempts": self.max_attempts},
                    )
                    raise

                delay = state.next_delay(self.time_unit)
                self.logger.warning(
                    f"🔄 API_RETRY: {description} attempt {state.attempt + 1}/{self.max_attempts} "
                    f"failed - retrying in {delay}s: {e}",
                    extra={
                        "attempt": state.attempt + 1,
                        "max_attempts": self.max_attempts,
                        "delay_seconds": delay,
                        "error_type": type(e).__name__,
                    },
                )
                await self._sleep(delay)
                state.advance()
                continue

            if state.attempt:
                self.logger.info(f"✅ API_RECOVERED: {description} succeeded on attempt {state.attempt + 1}")
            return result
