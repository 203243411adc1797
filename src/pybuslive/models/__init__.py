"""Pydantic models for bus backend payloads and published state."""

from pybuslive.models.geo import Coordinate
from pybuslive.models.route import Route, Stop
from pybuslive.models.state import SearchState, StopEstimate, TrackerState
from pybuslive.models.suggestion import Suggestion
from pybuslive.models.vehicle import Direction, Vehicle

__all__ = [
    "Coordinate",
    "Direction",
    "Route",
    "SearchState",
    "Stop",
    "StopEstimate",
    "Suggestion",
    "TrackerState",
    "Vehicle",
]
