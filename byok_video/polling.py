"""Fixed-interval polling of a submitted job under a wall-clock deadline."""

import asyncio
import logging
import time
from enum import Enum
from typing import Awaitable, Callable

from .exceptions import ProviderJobError, TransientPollError, VideoGenerationTimeoutError
from .types import PollResult, RawPayload

logger = logging.getLogger(__name__)

PollOnce = Callable[[], Awaitable[PollResult]]


class PollState(str, Enum):
    """Lifecycle of one polled job."""

    SUBMITTED = "submitted"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMEOUT = "timeout"


TERMINAL_STATES = frozenset({PollState.SUCCEEDED, PollState.FAILED, PollState.TIMEOUT})


class PollLoop:
    """
    Drive a provider's status check until the job reaches a terminal state.

    One instance polls one job. The interval is flat (no backoff). Waiting
    uses the injected ``sleep`` coroutine, ``asyncio.sleep`` by default, so
    other generation calls keep running while this one waits.
    """

    def __init__(
        self,
        interval_seconds: float = 5.0,
        deadline_seconds: float = 600.0,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval_seconds = interval_seconds
        self.deadline_seconds = deadline_seconds
        self._sleep = sleep
        self._clock = clock
        self.state = PollState.SUBMITTED
        self.ticks = 0

    async def run(self, poll_once: PollOnce, *, provider: str, job_id: str) -> RawPayload:
        """
        Poll until success, failure or deadline.

        Args:
            poll_once: Zero-argument coroutine function performing one status check
            provider: Provider id, for errors and logs
            job_id: Provider job id, for errors and logs

        Returns:
            The provider's success payload

        Raises:
            ProviderJobError: The provider reported a failed job
            VideoGenerationTimeoutError: The deadline elapsed first
        """
        if self.state is not PollState.SUBMITTED:
            raise RuntimeError(f"PollLoop already used (state: {self.state.value})")

        started = self._clock()

        while True:
            remaining = self.deadline_seconds - (self._clock() - started)
            if remaining <= 0:
                break
            await self._sleep(min(self.interval_seconds, remaining))

            remaining = self.deadline_seconds - (self._clock() - started)
            if remaining <= 0:
                break

            self.state = PollState.POLLING
            self.ticks += 1
            try:
                result = await asyncio.wait_for(poll_once(), timeout=remaining)
            except TransientPollError as exc:
                logger.warning("[BYOK:%s] Job %s status check failed, still waiting: %s", provider, job_id, exc)
                continue
            except asyncio.TimeoutError:
                break

            if result.status == "succeeded":
                if result.payload is None:
                    self.state = PollState.FAILED
                    raise ProviderJobError(provider, job_id, "job succeeded without a result payload")
                self.state = PollState.SUCCEEDED
                return result.payload

            if result.status == "failed":
                self.state = PollState.FAILED
                raise ProviderJobError(provider, job_id, result.error)

            logger.debug(
                "[BYOK:%s] Job %s status: pending (%s)", provider, job_id, result.progress or "no progress"
            )

        self.state = PollState.TIMEOUT
        raise VideoGenerationTimeoutError(
            provider=provider,
            job_id=job_id,
            timeout_seconds=self.deadline_seconds,
        )
