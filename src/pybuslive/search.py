"""Route search box: debounced suggestions and immediate lookups."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from pybuslive._constants import SUGGESTIONS_ERROR
from pybuslive.config import BusLiveConfig
from pybuslive.models.state import SearchState
from pybuslive.models.suggestion import Suggestion
from pybuslive.scheduling.debounce import DebounceScheduler
from pybuslive.scheduling.polling import SleepFn
from pybuslive.scheduling.slot import CancellableRequestSlot

_logger = logging.getLogger(__name__)


class SuggestionSource(Protocol):
    async def search_routes(self, query: str) -> list[Suggestion]:
        ...


class RouteSearch:
    """Suggestions for what the user is typing.

    :meth:`update` is called per keystroke and only queries the backend
    once the text has been stable for ``config.search_debounce`` seconds.
    :meth:`search_now` looks the text up straight away, for a results
    page. Both share the rule that only the latest lookup may change
    :attr:`state`; blank text empties the suggestions without a request.
    """

    def __init__(
        self,
        source: SuggestionSource,
        *,
        config: BusLiveConfig | None = None,
        on_change: Callable[[SearchState], None] | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._source = source
        self._config = config or BusLiveConfig()
        self._on_change = on_change
        self._state = SearchState()
        self._debouncer: DebounceScheduler[list[Suggestion]] = DebounceScheduler(
            self._apply,
            on_error=self._report_error,
            on_clear=self._clear,
            sleep=sleep,
            name="search",
        )
        self._immediate: CancellableRequestSlot[list[Suggestion]] = CancellableRequestSlot(
            self._apply,
            self._report_error,
            name="search-now",
        )

    async def __aenter__(self) -> RouteSearch:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        return self._state.suggestions

    def update(self, text: str) -> None:
        """Record new input; the lookup waits for the quiet period."""
        self._immediate.cancel()
        self._publish(self._state.model_copy(update={"query": text}))
        self._debouncer.trigger(text, self._config.search_debounce, self._lookup)

    def search_now(self, text: str) -> None:
        """Look ``text`` up without waiting."""
        self._debouncer.cancel()
        self._publish(self._state.model_copy(update={"query": text}))
        query = text.strip()
        if not query:
            self._immediate.cancel()
            self._clear()
            return
        self._immediate.start(lambda: self._lookup(query))

    def close(self) -> None:
        self._debouncer.dispose()
        self._immediate.dispose()

    async def _lookup(self, query: str) -> list[Suggestion]:
        self._publish(self._state.model_copy(update={"loading": True}))
        return await self._source.search_routes(query)

    def _apply(self, suggestions: Sequence[Suggestion]) -> None:
        self._publish(
            self._state.model_copy(update={"suggestions": tuple(suggestions), "loading": False, "error": ""})
        )

    def _clear(self) -> None:
        self._publish(self._state.model_copy(update={"suggestions": (), "loading": False, "error": ""}))

    def _report_error(self, exc: BaseException) -> None:
        _logger.warning("Route search for %r failed: %s", self._state.query, exc)
        self._publish(self._state.model_copy(update={"loading": False, "error": SUGGESTIONS_ERROR}))

    def _publish(self, state: SearchState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
