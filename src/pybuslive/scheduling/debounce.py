"""Quiet-period debouncing for search input."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from pybuslive.exceptions import BusLiveError
from pybuslive.scheduling.polling import SleepFn
from pybuslive.scheduling.slot import CancellableRequestSlot

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class DebounceScheduler(Generic[T]):
    """Act on text input only once it has been stable for a while.

    Each :meth:`trigger` cancels the pending quiet timer and the request
    already in flight, so only the last input of a burst reaches the
    action. The action runs through a :class:`CancellableRequestSlot`;
    a slow response for an older input can never overwrite a newer one.

    Blank input skips the timer entirely and calls ``on_clear`` at once.

    Parameters
    ----------
    on_success : callable
        Receives the action result for the latest input.
    on_error : callable or None
        Receives the exception of a failed action.
    on_clear : callable or None
        Called when blank input clears the results.
    sleep : callable
        Awaitable sleep used for the quiet period.
    """

    def __init__(
        self,
        on_success: Callable[[T], None],
        *,
        on_error: Callable[[BaseException], None] | None = None,
        on_clear: Callable[[], None] | None = None,
        sleep: SleepFn = asyncio.sleep,
        name: str = "debounce",
    ) -> None:
        self._slot: CancellableRequestSlot[T] = CancellableRequestSlot(on_success, on_error, name=name)
        self._on_clear = on_clear
        self._sleep = sleep
        self._name = name
        self._timer: asyncio.Task[None] | None = None
        self._latest: str | None = None
        self._disposed = False

    @property
    def latest_input(self) -> str | None:
        return self._latest

    @property
    def pending(self) -> bool:
        """Whether a quiet timer or a request is outstanding."""
        return (self._timer is not None and not self._timer.done()) or self._slot.pending

    def trigger(self, text: str, quiet: float, action: Callable[[str], Awaitable[T]]) -> None:
        """Record ``text`` and (re)start the quiet timer.

        Must be called from a running event loop.

        Raises
        ------
        BusLiveError
            If the scheduler has been disposed.
        """
        if self._disposed:
            raise BusLiveError(f"{self._name}: cannot trigger a disposed debouncer")
        self._latest = text
        self._cancel_timer()
        self._slot.cancel()

        query = text.strip()
        if not query:
            if self._on_clear is not None:
                self._on_clear()
            return

        self._timer = asyncio.get_running_loop().create_task(
            self._fire(query, quiet, action),
            name=f"{self._name}-timer",
        )

    def cancel(self) -> None:
        """Drop the pending timer and request without disposing."""
        self._cancel_timer()
        self._slot.cancel()

    def dispose(self) -> None:
        """Cancel everything and refuse further triggers. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self._cancel_timer()
        self._slot.dispose()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _fire(self, query: str, quiet: float, action: Callable[[str], Awaitable[T]]) -> None:
        await self._sleep(quiet)
        self._timer = None
        _logger.debug("%s: quiet period over, querying %r", self._name, query)
        self._slot.start(lambda: action(query))
