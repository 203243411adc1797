"""Ownership of the shapes drawn for a tracked route."""

from __future__ import annotations

import html
import logging
from collections.abc import Sequence

from pybuslive._constants import (
    BUS_ICON_HTML,
    BUS_ICON_SIZE,
    ROUTE_LINE_COLOR,
    ROUTE_LINE_OPACITY,
    ROUTE_LINE_WEIGHT,
    ROUTE_OUTLINE_COLOR,
    ROUTE_OUTLINE_OPACITY,
    ROUTE_OUTLINE_WEIGHT,
    STOP_MARKER_COLOR,
    STOP_MARKER_RADIUS,
)
from pybuslive.geo import bounds_center
from pybuslive.models.route import Stop
from pybuslive.models.vehicle import Vehicle
from pybuslive.render.surface import LineStyle, MapSurface, MarkerKind, MarkerOptions, OverlayHandle

_logger = logging.getLogger(__name__)

OUTLINE_STYLE = LineStyle(color=ROUTE_OUTLINE_COLOR, weight=ROUTE_OUTLINE_WEIGHT, opacity=ROUTE_OUTLINE_OPACITY)
LINE_STYLE = LineStyle(color=ROUTE_LINE_COLOR, weight=ROUTE_LINE_WEIGHT, opacity=ROUTE_LINE_OPACITY)


def stop_marker_options(stop: Stop) -> MarkerOptions:
    name = stop.name
    return MarkerOptions(
        kind=MarkerKind.DOT,
        tooltip=name,
        popup=f"<b>{html.escape(name)}</b>" if name else None,
        color=STOP_MARKER_COLOR,
        fill_color=STOP_MARKER_COLOR,
        radius=STOP_MARKER_RADIUS,
        weight=1,
        fill_opacity=1.0,
    )


def vehicle_marker_options(vehicle: Vehicle) -> MarkerOptions:
    detail = " ".join(part for part in (vehicle.status or "", vehicle.direction.value) if part)
    popup = (
        f"<b>{html.escape(vehicle.route_no)}</b><br/>"
        f"Bus #{html.escape(vehicle.bus_id)}<br/>"
        f"{html.escape(detail)}"
    )
    return MarkerOptions(
        kind=MarkerKind.ICON,
        title=vehicle.title,
        popup=popup,
        icon_html=BUS_ICON_HTML,
        icon_size=BUS_ICON_SIZE,
    )


class OverlayLayerManager:
    """Sole owner of the route line, stop markers and vehicle markers.

    Every update removes the previous generation of a group before drawing
    the next, so a group never holds more than one generation of shapes.
    Only :meth:`set_route` moves the view; vehicle refreshes leave the
    user's pan and zoom alone.
    """

    def __init__(self, surface: MapSurface) -> None:
        self._surface = surface
        self._route_line: list[OverlayHandle] = []
        self._stop_markers: list[OverlayHandle] = []
        self._vehicle_markers: list[OverlayHandle] = []

    @property
    def route_line_count(self) -> int:
        return len(self._route_line)

    @property
    def stop_marker_count(self) -> int:
        return len(self._stop_markers)

    @property
    def vehicle_marker_count(self) -> int:
        return len(self._vehicle_markers)

    def set_route(self, stops: Sequence[Stop]) -> None:
        """Replace the route line and stop markers.

        An empty ``stops`` (unknown route) just leaves them cleared.
        """
        self._release(self._route_line)
        self._release(self._stop_markers)
        if not stops:
            return

        points = [stop.coordinate for stop in stops]
        self._route_line.append(self._surface.draw_line(points, OUTLINE_STYLE))
        self._route_line.append(self._surface.draw_line(points, LINE_STYLE))

        if len(points) > 1:
            self._surface.pan_to(bounds_center(points))

        for stop in stops:
            self._stop_markers.append(self._surface.draw_marker(stop.coordinate, stop_marker_options(stop)))
        _logger.debug("Drew route with %d stops", len(stops))

    def set_vehicles(self, vehicles: Sequence[Vehicle]) -> int:
        """Replace the vehicle markers; return how many were drawn.

        Vehicles without a usable position are skipped.
        """
        self._release(self._vehicle_markers)
        for vehicle in vehicles:
            position = vehicle.coordinate
            if position is None:
                _logger.debug("Skipping vehicle %s without a usable position", vehicle.title)
                continue
            self._vehicle_markers.append(self._surface.draw_marker(position, vehicle_marker_options(vehicle)))
        return len(self._vehicle_markers)

    def teardown(self) -> None:
        """Remove every shape this manager owns."""
        self._release(self._vehicle_markers)
        self._release(self._stop_markers)
        self._release(self._route_line)

    def _release(self, handles: list[OverlayHandle]) -> None:
        while handles:
            self._surface.remove_layer(handles.pop())
