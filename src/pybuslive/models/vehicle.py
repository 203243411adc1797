"""Live vehicle position model."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pybuslive.ingestion.normalize import safe_float, safe_str
from pybuslive.models._base import BusLiveBaseModel
from pybuslive.models.geo import Coordinate


class Direction(StrEnum):
    """Direction of travel along a route's stop order."""

    UP = "UP"
    DOWN = "DOWN"

    @classmethod
    def parse(cls, value: Any) -> Direction:
        """Case-insensitive parse; missing means ``UP``, anything but ``UP`` is ``DOWN``."""
        if isinstance(value, Direction):
            return value
        text = safe_str(value)
        if text is None:
            return cls.UP
        return cls.UP if text.upper() == cls.UP.value else cls.DOWN


class Vehicle(BusLiveBaseModel):
    """A live position report for one bus.

    Parsed from the ``/buses/routes/{route}/active-buses`` response. The
    coordinates are kept as loosely parsed floats; use :attr:`coordinate`
    to get a validated position.
    """

    bus_id: str = Field(default="", validation_alias=AliasChoices("bus_id", "busId", "id"))
    """Vehicle identifier."""
    route_no: str = Field(default="", validation_alias=AliasChoices("route_no", "routeNo", "route"))
    """Route number as reported by the backend."""
    latitude: float | None = Field(default=None, validation_alias=AliasChoices("lat", "latitude"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("lng", "lon", "longitude"))
    direction: Direction = Field(default=Direction.UP, validation_alias=AliasChoices("direction", "dir"))
    status: str | None = Field(default=None, validation_alias=AliasChoices("status"))
    """Free-form status text (e.g. ``"On time"``)."""

    @field_validator("bus_id", "route_no", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("direction", mode="before")
    @classmethod
    def _coerce_direction(cls, value: Any) -> Direction:
        return Direction.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> str | None:
        return safe_str(value)

    @property
    def coordinate(self) -> Coordinate | None:
        """Validated position, ``None`` when missing, non-finite or out of range."""
        return Coordinate.try_from(self.latitude, self.longitude)

    @property
    def title(self) -> str:
        return f"{self.route_no} #{self.bus_id}"
