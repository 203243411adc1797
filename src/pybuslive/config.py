"""Client configuration for pybuslive."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pybuslive._constants import (
    BASE_URL,
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_ZOOM,
    POLL_INTERVAL_S,
    SEARCH_DEBOUNCE_S,
)
from pybuslive.exceptions import BusLiveConfigError


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise BusLiveConfigError(f"{key} must be a number, got {value!r}") from exc


def _parse_center(value: str) -> tuple[float, float]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise BusLiveConfigError(f"BUSLIVE_MAP_CENTER must be 'lat,lng', got {value!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise BusLiveConfigError(f"BUSLIVE_MAP_CENTER must be 'lat,lng', got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class BusLiveConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL, without a trailing slash.
    poll_interval : float
        Seconds between active-bus poll cycles.
    search_debounce : float
        Quiet period in seconds before a suggestion query is sent.
    map_center : tuple of float
        Initial ``(lat, lng)`` of the map view.
    map_zoom : int
        Initial zoom level of the map view.
    routes_file : str or None
        Path to the JSON route catalog.
    request_timeout : float or None
        Total aiohttp request timeout in seconds. ``None`` keeps the
        aiohttp default.
    """

    base_url: str = BASE_URL
    poll_interval: float = POLL_INTERVAL_S
    search_debounce: float = SEARCH_DEBOUNCE_S
    map_center: tuple[float, float] = DEFAULT_MAP_CENTER
    map_zoom: int = DEFAULT_MAP_ZOOM
    routes_file: str | None = None
    request_timeout: float | None = None

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise BusLiveConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.search_debounce < 0:
            raise BusLiveConfigError(f"search_debounce must not be negative, got {self.search_debounce}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise BusLiveConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        # Normalise so endpoint paths can always be appended with a leading slash.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> BusLiveConfig:
        """Create configuration from environment variables.

        Reads the optional ``BUSLIVE_*`` variables. Explicit keyword
        arguments override environment values.

        Raises
        ------
        BusLiveConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("BUSLIVE_BASE_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        routes_file = env.get("BUSLIVE_ROUTES_FILE")
        if routes_file:
            config_kwargs["routes_file"] = routes_file

        _ENV_FLOAT_MAP = {
            "BUSLIVE_POLL_INTERVAL": "poll_interval",
            "BUSLIVE_SEARCH_DEBOUNCE": "search_debounce",
            "BUSLIVE_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            parsed = _env_float(env, env_key)
            if parsed is not None:
                config_kwargs[field_name] = parsed

        zoom = _env_float(env, "BUSLIVE_MAP_ZOOM")
        if zoom is not None and "map_zoom" not in overrides:
            config_kwargs["map_zoom"] = int(zoom)

        center = env.get("BUSLIVE_MAP_CENTER")
        if center and "map_center" not in overrides:
            config_kwargs["map_center"] = _parse_center(center)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
