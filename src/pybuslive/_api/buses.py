"""Bus endpoints.

Endpoints:
  - /buses/routes/{route_no}/active-buses
  - /buses/search?query=...
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pybuslive._transport import Transport


def active_buses_endpoint(route_no: str) -> str:
    """Path of the active-bus listing for ``route_no`` (trimmed, URL-quoted)."""
    return f"/buses/routes/{quote(route_no.strip(), safe='')}/active-buses"


SEARCH_ENDPOINT = "/buses/search"


async def request_active_buses(transport: Transport, route_no: str) -> Any:
    """Raw JSON payload of the active buses serving ``route_no``."""
    return await transport.get_json(active_buses_endpoint(route_no))


async def request_search(transport: Transport, query: str) -> Any:
    """Raw JSON payload of a route search."""
    return await transport.get_json(SEARCH_ENDPOINT, {"query": query})
