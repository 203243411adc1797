"""Coordinate value type."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pybuslive.ingestion.normalize import safe_float


class Coordinate(BaseModel):
    """A WGS84 position.

    Both components must be finite; ``lat`` is bounded to [-90, 90] and
    ``lng`` to [-180, 180]. Invalid values raise
    :class:`pydantic.ValidationError`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    lat: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    lng: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)

    @classmethod
    def try_from(cls, lat: Any, lng: Any) -> Coordinate | None:
        """Build a coordinate from loosely typed values, or ``None`` if invalid."""
        lat_value = safe_float(lat)
        lng_value = safe_float(lng)
        if lat_value is None or lng_value is None:
            return None
        try:
            return cls(lat=lat_value, lng=lng_value)
        except ValidationError:
            return None

    def as_tuple(self) -> tuple[float, float]:
        """``(lat, lng)`` pair, the order map libraries expect."""
        return (self.lat, self.lng)
