"""Route search suggestion model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pybuslive.ingestion.normalize import safe_str
from pybuslive.models._base import BusLiveBaseModel


class Suggestion(BusLiveBaseModel):
    """One match returned by ``/buses/search``."""

    route_no: str = Field(default="", validation_alias=AliasChoices("route_no", "routeNo", "route"))
    source: str = Field(default="", validation_alias=AliasChoices("source", "start"))
    destination: str = Field(default="", validation_alias=AliasChoices("destination", "dest"))

    @field_validator("route_no", "source", "destination", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return safe_str(value) or ""

    @property
    def label(self) -> str:
        """``"source - destination"`` line shown under the route number."""
        return f"{self.source} - {self.destination}"
