"""Static route catalog: route number -> ordered stops."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pybuslive.exceptions import BusLiveCatalogError
from pybuslive.ingestion.normalize import normalize_route_key
from pybuslive.models.route import Route, Stop

_logger = logging.getLogger(__name__)

_STOP_LIST = TypeAdapter(list[Stop])


class RouteStopIndex:
    """Read-only lookup of route stops.

    Keys are normalized (trimmed, uppercase) on load and on lookup. Routes
    with an empty stop list are treated the same as unknown routes.

    Usage::

        catalog = RouteStopIndex.from_json("routes.json")
        stops = catalog.get(" 12a ")
    """

    def __init__(self, routes: Mapping[str, Route]) -> None:
        self._routes: Mapping[str, Route] = MappingProxyType(dict(routes))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RouteStopIndex:
        """Build the index from ``{route_no: [stop, ...]}``.

        Raises
        ------
        BusLiveCatalogError
            If a route entry is not a list or a stop fails validation.
        """
        routes: dict[str, Route] = {}
        for raw_key, raw_stops in data.items():
            key = normalize_route_key(raw_key)
            if not key:
                raise BusLiveCatalogError(f"Route key {raw_key!r} is blank")
            if not isinstance(raw_stops, list):
                raise BusLiveCatalogError(f"Route {key} must map to a list of stops")
            try:
                stops = _STOP_LIST.validate_python(raw_stops)
            except ValidationError as exc:
                raise BusLiveCatalogError(f"Route {key} has invalid stops: {exc}") from exc
            if not stops:
                _logger.debug("Route %s has no stops; treating it as unknown", key)
                continue
            if key in routes:
                _logger.warning("Duplicate route key %s after normalization; keeping the last entry", key)
            routes[key] = Route(key=key, stops=tuple(stops))
        return cls(routes)

    @classmethod
    def from_json(cls, path: str | Path) -> RouteStopIndex:
        """Load the catalog from a JSON file."""
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise BusLiveCatalogError(f"Cannot read route catalog {file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise BusLiveCatalogError(f"Route catalog {file_path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise BusLiveCatalogError(f"Route catalog {file_path} must be a JSON object")
        index = cls.from_mapping(data)
        _logger.debug("Loaded %d routes from %s", len(index), file_path)
        return index

    def get(self, route_no: Any) -> tuple[Stop, ...] | None:
        """Ordered stops of ``route_no``, or ``None`` for an unknown route."""
        route = self._routes.get(normalize_route_key(route_no))
        return route.stops if route is not None else None

    def route(self, route_no: Any) -> Route | None:
        return self._routes.get(normalize_route_key(route_no))

    def __contains__(self, route_no: object) -> bool:
        return normalize_route_key(route_no) in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)
