"""Nearest-stop matching for a vehicle on its route."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pybuslive.geo import haversine_distance
from pybuslive.models.geo import Coordinate
from pybuslive.models.route import Stop
from pybuslive.models.state import StopEstimate
from pybuslive.models.vehicle import Direction, Vehicle

_logger = logging.getLogger(__name__)


def locate(position: Coordinate, direction: Direction | str, stops: Sequence[Stop]) -> StopEstimate:
    """Find the stop nearest to ``position`` and the one after it.

    Scans every stop once; ties go to the lowest index. The next stop is
    one further along the stop order for ``UP`` and one back for
    ``DOWN``, clamped to the ends of the route.

    Raises
    ------
    ValueError
        If ``stops`` is empty. Callers should report missing stop data
        instead of calling this.
    """
    if not stops:
        raise ValueError("locate() requires at least one stop")

    best_index = 0
    best_distance = float("inf")
    for index, stop in enumerate(stops):
        distance = haversine_distance(position, stop.coordinate)
        if distance < best_distance:
            best_distance = distance
            best_index = index

    if Direction.parse(direction) is Direction.UP:
        next_index = min(best_index + 1, len(stops) - 1)
    else:
        next_index = max(best_index - 1, 0)

    return StopEstimate(
        current_index=best_index,
        next_index=next_index,
        current_stop=stops[best_index].name or "",
        next_stop=stops[next_index].name or "",
        distance_m=best_distance,
    )


def estimate_for_vehicles(vehicles: Sequence[Vehicle], stops: Sequence[Stop]) -> StopEstimate | None:
    """Estimate current/next stop from the first vehicle in ``vehicles``.

    Response order is taken as-is; no attempt is made to pick a vehicle
    closer to any particular stop. Returns ``None`` when there is no
    vehicle, no stop, or the first vehicle has no usable position.
    """
    if not vehicles or not stops:
        return None
    first = vehicles[0]
    position = first.coordinate
    if position is None:
        _logger.debug("First vehicle %s has no usable position", first.title)
        return None
    return locate(position, first.direction, stops)
