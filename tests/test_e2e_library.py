from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from _helpers import FakeClock, RecordingSurface, settle
from pybuslive.catalog import RouteStopIndex
from pybuslive.client import BusLiveClient
from pybuslive.config import BusLiveConfig
from pybuslive.exceptions import BusLiveError, BusLiveTransportError
from pybuslive.search import RouteSearch
from pybuslive.tracker import RouteTracker


@dataclass
class FakeBusBackend:
    calls: list[tuple[str, dict[str, str] | None]] = field(default_factory=list)
    buses: list[Any] = field(default_factory=list)
    wrap_search: bool = False
    fail_endpoints: set[str] = field(default_factory=set)

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        self.calls.append((endpoint, dict(params) if params else None))
        await asyncio.sleep(0)

        if endpoint in self.fail_endpoints:
            raise BusLiveTransportError(f"HTTP 503 from {endpoint}", status_code=503, endpoint=endpoint)

        if endpoint.endswith("/active-buses"):
            return self.buses

        if endpoint == "/buses/search":
            results = [
                {"route_no": "12A", "source": "Colaba", "destination": "Dadar"},
                {"route_no": "12", "source": "Colaba", "destination": None},
                "not a suggestion",
            ]
            return {"response": results} if self.wrap_search else results

        raise AssertionError(f"Unexpected endpoint in E2E fake backend: {endpoint}")


@pytest.fixture
def config() -> BusLiveConfig:
    return BusLiveConfig(base_url="http://buses.test", poll_interval=7.0, search_debounce=0.3)


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeBusBackend:
    fake = FakeBusBackend()

    async def fake_get_json(_self: Any, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        return await fake.get_json(endpoint, params)

    monkeypatch.setattr("pybuslive._transport.HttpTransport.get_json", fake_get_json)
    return fake


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_tracker_follows_route(
    config: BusLiveConfig,
    backend: FakeBusBackend,
    catalog: RouteStopIndex,
    surface: RecordingSurface,
    clock: FakeClock,
) -> None:
    backend.buses = [
        {"bus_id": 4411, "route_no": "12A", "lat": "19.001", "lng": "72.802", "direction": "UP", "status": "On time"},
        {"bus_id": 4412, "route_no": "12A", "lat": "--", "lng": 72.8},
    ]

    async with BusLiveClient(config) as client:
        async with RouteTracker(client, catalog, surface, config=config, sleep=clock.sleep) as tracker:
            tracker.show_route("12A")
            await settle()
            await clock.advance(7.0)

            state = tracker.state
            assert state.cycles_applied == 2
            assert len(state.vehicles) == 2
            assert (state.current_stop, state.next_stop) == ("X", "Y")
            assert tracker.overlays.vehicle_marker_count == 1

    assert backend.calls == [("/buses/routes/12A/active-buses", None)] * 2
    assert surface.layers == {}


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_route_number_is_url_quoted(config: BusLiveConfig, backend: FakeBusBackend) -> None:
    async with BusLiveClient(config) as client:
        assert await client.get_active_buses(" 12/A ") == []

    assert backend.calls == [("/buses/routes/12%2FA/active-buses", None)]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_non_list_bus_payload_is_empty(config: BusLiveConfig, backend: FakeBusBackend) -> None:
    backend.buses = {"detail": "not found"}  # type: ignore[assignment]
    async with BusLiveClient(config) as client:
        assert await client.get_active_buses("12A") == []


@pytest.mark.asyncio
@pytest.mark.e2e
@pytest.mark.parametrize("wrap", [False, True])
async def test_e2e_search_accepts_both_shapes(
    config: BusLiveConfig, backend: FakeBusBackend, clock: FakeClock, wrap: bool
) -> None:
    backend.wrap_search = wrap

    async with BusLiveClient(config) as client:
        async with RouteSearch(client, config=config, sleep=clock.sleep) as search:
            search.update("Colaba")
            await clock.advance(0.3)

            assert [s.label for s in search.suggestions] == ["Colaba - Dadar", "Colaba - "]

    assert backend.calls == [("/buses/search", {"query": "Colaba"})]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_blank_search_sends_nothing(config: BusLiveConfig, backend: FakeBusBackend) -> None:
    async with BusLiveClient(config) as client:
        assert await client.search_routes("   ") == []
    assert backend.calls == []


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_transport_error_surfaces_as_state(
    config: BusLiveConfig,
    backend: FakeBusBackend,
    catalog: RouteStopIndex,
    surface: RecordingSurface,
    clock: FakeClock,
) -> None:
    backend.fail_endpoints = {"/buses/routes/12A/active-buses", "/buses/search"}

    async with BusLiveClient(config) as client:
        with pytest.raises(BusLiveTransportError) as excinfo:
            await client.get_active_buses("12A")
        assert excinfo.value.status_code == 503

        async with RouteTracker(client, catalog, surface, config=config, sleep=clock.sleep) as tracker:
            tracker.show_route("12A")
            await settle()
            assert tracker.state.error == "Failed to fetch active buses"
            assert tracker.state.route_known is True

        async with RouteSearch(client, config=config, sleep=clock.sleep) as search:
            search.search_now("Dadar")
            await settle()
            assert search.state.error == "Failed to fetch suggestions"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_client_requires_context_manager(config: BusLiveConfig) -> None:
    client = BusLiveClient(config)
    with pytest.raises(BusLiveError):
        await client.get_active_buses("12A")
