"""Fixed-cadence polling on top of a request slot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Generic, TypeVar

from pybuslive.exceptions import BusLiveError
from pybuslive.scheduling.slot import CancellableRequestSlot

_logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


class PollState(StrEnum):
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"


class PollingScheduler(Generic[T]):
    """Run a fetch-and-apply cycle now and then every ``interval`` seconds.

    Every cycle goes through one :class:`CancellableRequestSlot`: when a
    fetch is still running as the next tick arrives it is cancelled and
    its result never applied. A failing cycle is reported and polling
    simply carries on at the next tick.

    ``IDLE -> ACTIVE -> STOPPED``; a stopped scheduler cannot be
    restarted, create a new one instead.

    Parameters
    ----------
    sleep : callable
        Awaitable sleep used between ticks. Tests inject a simulated clock.
    name : str
        Label used in task names and log lines.
    """

    def __init__(self, *, sleep: SleepFn = asyncio.sleep, name: str = "poll") -> None:
        self._sleep = sleep
        self._name = name
        self._state = PollState.IDLE
        self._slot: CancellableRequestSlot[T] | None = None
        self._timer: asyncio.Task[None] | None = None
        self._cycles = 0

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def cycles(self) -> int:
        """Number of cycles started so far."""
        return self._cycles

    def start(
        self,
        interval: float,
        fetch: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None],
        on_error: Callable[[BaseException], None] | None = None,
    ) -> None:
        """Begin polling. Must be called from a running event loop.

        Raises
        ------
        ValueError
            If ``interval`` is not positive.
        BusLiveError
            If the scheduler was already started or stopped.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if self._state is not PollState.IDLE:
            raise BusLiveError(f"{self._name}: scheduler is {self._state}, cannot start")

        self._slot = CancellableRequestSlot(on_success, on_error, name=self._name)
        self._state = PollState.ACTIVE
        self._run_cycle(fetch)
        self._timer = asyncio.get_running_loop().create_task(
            self._tick(interval, fetch),
            name=f"{self._name}-timer",
        )

    def stop(self) -> None:
        """Cancel the in-flight fetch and the timer. Idempotent."""
        if self._state is PollState.STOPPED:
            return
        self._state = PollState.STOPPED
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._slot is not None:
            self._slot.dispose()
        _logger.debug("%s: stopped after %d cycles", self._name, self._cycles)

    def _run_cycle(self, fetch: Callable[[], Awaitable[T]]) -> None:
        assert self._slot is not None  # noqa: S101
        self._cycles += 1
        _logger.debug("%s: cycle %d", self._name, self._cycles)
        self._slot.start(fetch)

    async def _tick(self, interval: float, fetch: Callable[[], Awaitable[T]]) -> None:
        while self._state is PollState.ACTIVE:
            await self._sleep(interval)
            if self._state is not PollState.ACTIVE:
                return
            self._run_cycle(fetch)
