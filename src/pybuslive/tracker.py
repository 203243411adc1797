"""Live view of one route: polling, overlays and the nearest-stop estimate."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from functools import partial
from typing import Any, Protocol

from pybuslive._constants import ACTIVE_BUSES_ERROR, NO_STOP_DATA
from pybuslive.catalog import RouteStopIndex
from pybuslive.config import BusLiveConfig
from pybuslive.exceptions import BusLiveError
from pybuslive.ingestion.normalize import normalize_route_key
from pybuslive.locator import estimate_for_vehicles
from pybuslive.models.geo import Coordinate
from pybuslive.models.route import Stop
from pybuslive.models.state import TrackerState
from pybuslive.models.vehicle import Vehicle
from pybuslive.overlay import OverlayLayerManager
from pybuslive.render.surface import MapSurface
from pybuslive.scheduling.polling import PollingScheduler, SleepFn

_logger = logging.getLogger(__name__)


class ActiveBusSource(Protocol):
    """Anything that can list live buses, e.g. :class:`~pybuslive.client.BusLiveClient`."""

    async def get_active_buses(self, route_no: str) -> list[Vehicle]:
        ...


class RouteTracker:
    """Track the buses of one route at a time.

    Selecting a route draws its line and stops once, then polls the
    backend every ``config.poll_interval`` seconds. Each successful poll
    redraws the bus markers and re-estimates the current and next stop
    from the first bus in the response. A failed poll only sets
    :attr:`TrackerState.error`; markers and estimate stay as they were
    and the next tick retries.

    Usage::

        async with BusLiveClient(config) as client:
            async with RouteTracker(client, catalog, surface, config=config) as tracker:
                tracker.show_route("12A")
                ...
    """

    def __init__(
        self,
        source: ActiveBusSource,
        catalog: RouteStopIndex,
        surface: MapSurface,
        *,
        config: BusLiveConfig | None = None,
        on_update: Callable[[TrackerState], None] | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._source = source
        self._catalog = catalog
        self._config = config or BusLiveConfig()
        self._on_update = on_update
        self._sleep = sleep
        self._overlays = OverlayLayerManager(surface)
        self._poller: PollingScheduler[list[Vehicle]] | None = None
        self._stops: tuple[Stop, ...] = ()
        self._state = TrackerState()
        self._closed = False

        lat, lng = self._config.map_center
        surface.set_view(Coordinate(lat=lat, lng=lng), self._config.map_zoom)

    async def __aenter__(self) -> RouteTracker:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def overlays(self) -> OverlayLayerManager:
        return self._overlays

    @property
    def stops(self) -> tuple[Stop, ...]:
        return self._stops

    @property
    def polling(self) -> bool:
        return self._poller is not None

    def show_route(self, route_no: str) -> TrackerState:
        """Switch to ``route_no`` and start polling it.

        Must be called from a running event loop. An unknown route still
        polls for buses; it just has no line, stops or estimate. A blank
        route number clears the view and does not poll.

        Raises
        ------
        BusLiveError
            If the tracker has been closed.
        """
        if self._closed:
            raise BusLiveError("RouteTracker is closed")
        self._stop_polling()

        route = route_no.strip()
        key = normalize_route_key(route)
        self._stops = self._catalog.get(key) or ()
        if key and not self._stops:
            _logger.info("Route %s is not in the catalog", key)

        self._overlays.set_vehicles([])
        self._overlays.set_route(self._stops)
        self._publish(TrackerState(route_no=route, route_known=bool(self._stops), stop_count=len(self._stops)))

        if not key:
            return self._state

        poller: PollingScheduler[list[Vehicle]] = PollingScheduler(sleep=self._sleep, name=f"poll-{key}")
        poller.start(
            self._config.poll_interval,
            partial(self._source.get_active_buses, route),
            self._apply_vehicles,
            self._report_error,
        )
        self._poller = poller
        return self._state

    def close(self) -> None:
        """Stop polling and remove every shape. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._stop_polling()
        self._overlays.teardown()

    def _stop_polling(self) -> None:
        if self._poller is not None:
            self._poller.stop()
            self._poller = None

    def _apply_vehicles(self, vehicles: Sequence[Vehicle]) -> None:
        drawn = self._overlays.set_vehicles(vehicles)
        estimate = estimate_for_vehicles(vehicles, self._stops)
        notice = NO_STOP_DATA if vehicles and not self._stops else ""
        _logger.debug("%s: %d buses, %d drawn, estimate=%s", self._state.route_no, len(vehicles), drawn, estimate)
        self._publish(
            self._state.model_copy(
                update={
                    "vehicles": tuple(vehicles),
                    "estimate": estimate,
                    "error": "",
                    "notice": notice,
                    "cycles_applied": self._state.cycles_applied + 1,
                    "updated_at": datetime.now(UTC),
                }
            )
        )

    def _report_error(self, exc: BaseException) -> None:
        _logger.warning("Polling %s failed: %s", self._state.route_no, exc)
        self._publish(self._state.model_copy(update={"error": ACTIVE_BUSES_ERROR, "updated_at": datetime.now(UTC)}))

    def _publish(self, state: TrackerState) -> None:
        self._state = state
        if self._on_update is not None:
            self._on_update(state)
