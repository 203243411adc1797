"""Snapshots published by the tracker and search components."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pybuslive.models.suggestion import Suggestion
from pybuslive.models.vehicle import Vehicle


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StopEstimate(BaseModel):
    """Where a vehicle is along its route.

    Parameters
    ----------
    current_index : int
        Index of the stop nearest to the vehicle.
    next_index : int
        Index of the following stop in the direction of travel, clamped
        to the ends of the route.
    current_stop : str
        Name of the current stop, empty when unnamed.
    next_stop : str
        Name of the next stop, empty when unnamed.
    distance_m : float
        Distance from the vehicle to the current stop in metres.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current_index: int = Field(ge=0)
    next_index: int = Field(ge=0)
    current_stop: str = ""
    next_stop: str = ""
    distance_m: float = Field(default=0.0, ge=0.0)


class TrackerState(BaseModel):
    """Immutable view of a :class:`~pybuslive.tracker.RouteTracker`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    route_no: str = ""
    route_known: bool = False
    stop_count: int = 0
    vehicles: tuple[Vehicle, ...] = ()
    estimate: StopEstimate | None = None
    error: str = ""
    """Transient transport error text, cleared by the next successful cycle."""
    notice: str = ""
    """Informational text such as "No stop data available"."""
    cycles_applied: int = 0
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def current_stop(self) -> str:
        return self.estimate.current_stop if self.estimate is not None else ""

    @property
    def next_stop(self) -> str:
        return self.estimate.next_stop if self.estimate is not None else ""


class SearchState(BaseModel):
    """Immutable view of a :class:`~pybuslive.search.RouteSearch`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str = ""
    suggestions: tuple[Suggestion, ...] = ()
    loading: bool = False
    error: str = ""
