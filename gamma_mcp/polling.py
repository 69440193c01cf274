"""Generation status polling.

The loop is split in two layers:

* :func:`decide` is a pure step function. Given the last observed status and
  the elapsed time it returns the next action (return, wait, or time out).
* :class:`GenerationPoller` drives that function against a status fetcher and
  a :class:`Clock`. Production uses :class:`MonotonicClock`; tests pass a fake
  clock so timeouts and iteration counts are checked without real delays.

The elapsed-time check runs after a non-terminal response, never before a
request, so a poll may overrun ``max_wait_seconds`` by up to one interval plus
one round trip.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any, Protocol

from loguru import logger
from pydantic import BaseModel, Field

from .exceptions import PollTimeoutError
from .shard import constants as C
from .shard.enums import GenerationStatus

StatusFetcher = Callable[[str], Awaitable[dict[str, Any]]]


class PollState(StrEnum):
    UNSTARTED = "unstarted"
    CHECKING = "checking"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    ERRORED = "errored"


class PollAction(StrEnum):
    RETURN = "return"
    WAIT = "wait"
    TIMEOUT = "timeout"


class PollDecision(BaseModel):
    action: PollAction
    delay_seconds: float = Field(default=0.0, ge=0)


def decide(status: str | None, elapsed: float, *, max_wait_seconds: float, interval_seconds: float = C.POLL_INTERVAL_SECONDS) -> PollDecision:
    """Return the next polling step for an observed status.

    Only ``completed`` and ``failed`` stop the loop; every other value,
    including labels Gamma may add later, counts as still running.
    """
    if GenerationStatus.is_terminal(status):
        return PollDecision(action=PollAction.RETURN)
    if elapsed >= max_wait_seconds:
        return PollDecision(action=PollAction.TIMEOUT)
    return PollDecision(action=PollAction.WAIT, delay_seconds=interval_seconds)


class Clock(Protocol):
    def now(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...


class MonotonicClock:
    """Wall clock for production polling; sleeps yield to the event loop."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class GenerationPoller:
    """Resolve a generation's status, optionally waiting for a terminal state.

    One instance handles one poll invocation at a time; ``state`` and
    ``checks`` describe the most recent run. No job is remembered between runs.
    """

    def __init__(self, fetch: StatusFetcher, *, interval_seconds: float = C.POLL_INTERVAL_SECONDS, clock: Clock | None = None) -> None:
        self._fetch = fetch
        self.interval_seconds = interval_seconds
        self.clock: Clock = clock or MonotonicClock()
        self.state = PollState.UNSTARTED
        self.checks = 0

    async def _check(self, generation_id: str) -> dict[str, Any]:
        self.checks += 1
        try:
            return await self._fetch(generation_id)
        except Exception:
            self.state = PollState.ERRORED
            raise

    async def check(self, generation_id: str) -> dict[str, Any]:
        """Issue exactly one status request and return it, terminal or not."""
        self.state = PollState.CHECKING
        self.checks = 0
        result = await self._check(generation_id)
        self.state = _state_for(result.get("status"))
        return result

    async def wait(self, generation_id: str, max_wait_seconds: float = C.DEFAULT_MAX_WAIT_SECONDS) -> dict[str, Any]:
        """Poll until the generation is completed or failed.

        Raises :class:`PollTimeoutError` once a non-terminal status is seen at
        or after ``max_wait_seconds``. HTTP and transport errors abort the loop
        on the first occurrence.
        """
        self.state = PollState.CHECKING
        self.checks = 0
        started = self.clock.now()

        while True:
            result = await self._check(generation_id)
            status = result.get("status")
            elapsed = self.clock.now() - started
            decision = decide(status, elapsed, max_wait_seconds=max_wait_seconds, interval_seconds=self.interval_seconds)

            if decision.action is PollAction.RETURN:
                self.state = _state_for(status)
                logger.info(f"Generation {generation_id} reached '{status}' after {self.checks} check(s), {elapsed:.1f}s")
                return result

            if decision.action is PollAction.TIMEOUT:
                self.state = PollState.TIMED_OUT
                logger.warning(f"Generation {generation_id} still '{status}' after {elapsed:.1f}s; giving up")
                raise PollTimeoutError(elapsed, status, max_wait_seconds)

            logger.debug(f"Generation {generation_id} is '{status}' ({elapsed:.1f}s elapsed); next check in {decision.delay_seconds:g}s")
            await self.clock.sleep(decision.delay_seconds)

    async def run(
        self,
        generation_id: str,
        poll_until_complete: bool = True,
        max_wait_seconds: float = C.DEFAULT_MAX_WAIT_SECONDS,
    ) -> dict[str, Any]:
        if not poll_until_complete:
            return await self.check(generation_id)
        return await self.wait(generation_id, max_wait_seconds)


def _state_for(status: Any) -> PollState:
    terminal = GenerationStatus.from_str(status) if isinstance(status, str) else None
    if terminal is GenerationStatus.COMPLETED:
        return PollState.COMPLETED
    if terminal is GenerationStatus.FAILED:
        return PollState.FAILED
    return PollState.CHECKING


__all__ = ["PollState", "PollAction", "PollDecision", "decide", "Clock", "MonotonicClock", "GenerationPoller"]
