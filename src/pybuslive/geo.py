"""Great-circle helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable

from pybuslive._constants import EARTH_RADIUS_M
from pybuslive.models.geo import Coordinate


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Distance between two coordinates in metres on a spherical Earth.

    Symmetric and zero for identical points. Non-finite components
    propagate as NaN; validate positions before calling.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    x = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # Rounding can push x a hair past 1.0 for antipodal points.
    x = min(1.0, max(0.0, x))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))


def bounds_center(points: Iterable[Coordinate]) -> Coordinate:
    """Centre of the lat/lng bounding box of ``points``.

    Raises
    ------
    ValueError
        If ``points`` is empty.
    """
    pts = list(points)
    if not pts:
        raise ValueError("bounds_center() requires at least one point")
    lats = [p.lat for p in pts]
    lngs = [p.lng for p in pts]
    return Coordinate(
        lat=(min(lats) + max(lats)) / 2,
        lng=(min(lngs) + max(lngs)) / 2,
    )
