"""Route and stop models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from pybuslive.ingestion.normalize import safe_str
from pybuslive.models._base import BusLiveBaseModel
from pybuslive.models.geo import Coordinate


class Stop(BusLiveBaseModel):
    """A fixed point along a route.

    Catalog entries look like ``{"lat": 19.0, "lng": 72.8, "stop_name": "X"}``;
    the flat ``lat``/``lng`` keys are lifted into :attr:`coordinate`.
    """

    coordinate: Coordinate
    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "stop_name", "stopName"))
    """Display name, ``None`` when the catalog has none."""

    @model_validator(mode="before")
    @classmethod
    def _lift_coordinate(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "coordinate" in values:
            return values
        lat = values.get("lat", values.get("latitude"))
        lng = values.get("lng", values.get("lon", values.get("longitude")))
        merged = dict(values)
        merged["coordinate"] = {"lat": lat, "lng": lng}
        merged.setdefault("raw", values)
        return merged

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return safe_str(value)

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lng(self) -> float:
        return self.coordinate.lng


class Route(BaseModel):
    """A named route and its ordered stops.

    Stop order is the direction of travel for ``UP``; ``DOWN`` runs it in
    reverse.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    """Normalized (trimmed, uppercase) route number."""
    stops: tuple[Stop, ...] = Field(min_length=1)

    @property
    def coordinates(self) -> list[Coordinate]:
        return [stop.coordinate for stop in self.stops]
