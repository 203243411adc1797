"""Single-flight holder for asynchronous requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Generic, TypeVar

from pybuslive.exceptions import BusLiveError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellableRequestSlot(Generic[T]):
    """Run at most one request at a time; only the latest may report.

    :meth:`start` cancels whatever request is still outstanding before
    launching the next one. Cancellation reaches the producer as
    :class:`asyncio.CancelledError`, so an aiohttp request in flight is
    aborted rather than left to finish.

    Every request is tagged with a generation number. Completion callbacks
    only run for the current generation, so a superseded request stays
    inert even when it had already finished and its done-callback was
    still queued on the loop.

    Parameters
    ----------
    on_success : callable
        Called with the result of the current request.
    on_error : callable or None
        Called with the exception of a failed current request. When
        omitted, failures are logged at WARNING.
    name : str
        Label used in task names and log lines.
    """

    def __init__(
        self,
        on_success: Callable[[T], None],
        on_error: Callable[[BaseException], None] | None = None,
        *,
        name: str = "slot",
    ) -> None:
        self._on_success = on_success
        self._on_error = on_error
        self._name = name
        self._generation = 0
        self._task: asyncio.Task[T] | None = None
        self._disposed = False

    @property
    def pending(self) -> bool:
        """Whether a request is outstanding."""
        return self._task is not None and not self._task.done()

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def generation(self) -> int:
        return self._generation

    def start(self, producer: Callable[[], Awaitable[T]]) -> asyncio.Task[T]:
        """Supersede any outstanding request and start ``producer()``.

        Must be called from a running event loop.

        Raises
        ------
        BusLiveError
            If the slot has been disposed.
        """
        if self._disposed:
            raise BusLiveError(f"{self._name}: cannot start a request on a disposed slot")
        self.cancel()
        generation = self._generation

        async def _run() -> T:
            return await producer()

        task = asyncio.get_running_loop().create_task(_run(), name=f"{self._name}-{generation}")
        task.add_done_callback(partial(self._on_done, generation))
        self._task = task
        return task

    def cancel(self) -> None:
        """Abandon the outstanding request, if any. The slot stays usable."""
        self._generation += 1
        task = self._task
        self._task = None
        if task is not None and not task.done():
            _logger.debug("%s: cancelling superseded request", self._name)
            task.cancel()

    def dispose(self) -> None:
        """Cancel the outstanding request and silence the slot for good."""
        if self._disposed:
            return
        self.cancel()
        self._disposed = True

    def _on_done(self, generation: int, task: asyncio.Task[T]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if self._disposed or generation != self._generation:
            _logger.debug("%s: dropping result of stale request #%d", self._name, generation)
            return
        self._task = None
        if exc is None:
            self._on_success(task.result())
            return
        if self._on_error is not None:
            self._on_error(exc)
        else:
            _logger.warning("%s: request failed: %s", self._name, exc)
