"""High-level async client for the bus backend."""

from __future__ import annotations

from typing import Any

import aiohttp

from pybuslive._transport import HttpTransport
from pybuslive.config import BusLiveConfig
from pybuslive.exceptions import BusLiveError
from pybuslive.ingestion.buses import fetch_active_buses, fetch_suggestions
from pybuslive.models.suggestion import Suggestion
from pybuslive.models.vehicle import Vehicle


class BusLiveClient:
    """Async client for the bus backend.

    Usage::

        async with BusLiveClient(config) as client:
            buses = await client.get_active_buses("12A")
    """

    def __init__(
        self,
        config: BusLiveConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or BusLiveConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    @property
    def config(self) -> BusLiveConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BusLiveClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise BusLiveError("Client not initialized. Use 'async with BusLiveClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_active_buses(self, route_no: str) -> list[Vehicle]:
        """Live positions of the buses currently serving ``route_no``.

        Raises
        ------
        BusLiveTransportError
            If the request fails. Cancelling the awaiting task aborts it.
        """
        return await fetch_active_buses(self._require_transport(), route_no)

    async def search_routes(self, query: str) -> list[Suggestion]:
        """Routes matching ``query`` by number or destination."""
        text = query.strip()
        if not text:
            return []
        return await fetch_suggestions(self._require_transport(), text)
