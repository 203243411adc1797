from __future__ import annotations

import pytest

from _helpers import RecordingSurface
from pybuslive.catalog import RouteStopIndex
from pybuslive.models.geo import Coordinate
from pybuslive.models.vehicle import Vehicle
from pybuslive.overlay import LINE_STYLE, OUTLINE_STYLE, OverlayLayerManager, vehicle_marker_options
from pybuslive.render.surface import MarkerKind


def _vehicle(bus_id: str, lat: float | None, lng: float | None) -> Vehicle:
    return Vehicle(bus_id=bus_id, route_no="7", latitude=lat, longitude=lng)


def test_route_draws_outline_line_and_stop_markers(surface: RecordingSurface, catalog: RouteStopIndex) -> None:
    stops = catalog.get("7")
    assert stops is not None
    overlays = OverlayLayerManager(surface)

    overlays.set_route(stops)

    lines = surface.of_kind("line")
    assert [style for _, _, style in lines] == [OUTLINE_STYLE, LINE_STYLE]
    assert len(lines[0][1]) == 4
    markers = surface.of_kind("marker")
    assert len(markers) == 4
    assert [options.tooltip for _, _, options in markers] == ["Depot", "Market", None, "Terminus"]
    assert all(options.kind is MarkerKind.DOT for _, _, options in markers)

    panned = surface.view_changes()
    assert len(panned) == 1
    center = panned[0][1]
    assert center.lat == pytest.approx(19.115)
    assert overlays.route_line_count == 2
    assert overlays.stop_marker_count == 4


def test_switching_routes_retires_previous_shapes(surface: RecordingSurface, catalog: RouteStopIndex) -> None:
    overlays = OverlayLayerManager(surface)
    overlays.set_route(catalog.get("7") or ())
    overlays.set_route(catalog.get("12A") or ())

    assert len(surface.of_kind("line")) == 2
    assert len(surface.of_kind("marker")) == 2


def test_unknown_route_leaves_map_empty(surface: RecordingSurface, catalog: RouteStopIndex) -> None:
    overlays = OverlayLayerManager(surface)
    overlays.set_route(catalog.get("7") or ())

    overlays.set_route(())

    assert surface.layers == {}
    assert len(surface.view_changes()) == 1


def test_single_stop_route_does_not_pan(surface: RecordingSurface) -> None:
    stops = RouteStopIndex.from_mapping({"1": [{"lat": 19.0, "lng": 72.8}]}).get("1")
    assert stops is not None
    OverlayLayerManager(surface).set_route(stops)

    assert surface.view_changes() == []
    assert len(surface.of_kind("marker")) == 1


def test_vehicles_replace_previous_generation(surface: RecordingSurface) -> None:
    overlays = OverlayLayerManager(surface)

    assert overlays.set_vehicles([_vehicle("1", 19.0, 72.8), _vehicle("2", 19.1, 72.9)]) == 2
    assert overlays.set_vehicles([_vehicle("3", 19.2, 72.95)]) == 1

    markers = surface.of_kind("marker")
    assert len(markers) == 1
    assert markers[0][1] == Coordinate(lat=19.2, lng=72.95)
    assert markers[0][2].title == "7 #3"


def test_vehicles_without_position_are_skipped(surface: RecordingSurface) -> None:
    overlays = OverlayLayerManager(surface)

    drawn = overlays.set_vehicles([_vehicle("1", None, 72.8), _vehicle("2", 19.0, 72.8), _vehicle("3", 91.0, 72.8)])

    assert drawn == 1
    assert overlays.vehicle_marker_count == 1


def test_vehicle_updates_never_move_the_view(surface: RecordingSurface) -> None:
    overlays = OverlayLayerManager(surface)
    for _ in range(3):
        overlays.set_vehicles([_vehicle("1", 19.0, 72.8)])
    overlays.set_vehicles([])

    assert surface.view_changes() == []
    assert surface.layers == {}


def test_teardown_removes_everything_once(surface: RecordingSurface, catalog: RouteStopIndex) -> None:
    overlays = OverlayLayerManager(surface)
    overlays.set_route(catalog.get("12A") or ())
    overlays.set_vehicles([_vehicle("1", 19.0, 72.8)])

    overlays.teardown()
    overlays.teardown()

    assert surface.layers == {}
    assert overlays.route_line_count == overlays.stop_marker_count == overlays.vehicle_marker_count == 0


def test_vehicle_popup_is_escaped() -> None:
    vehicle = Vehicle(bus_id="<1>", route_no="7", status="Late & full", latitude=19.0, longitude=72.8)
    options = vehicle_marker_options(vehicle)

    assert options.kind is MarkerKind.ICON
    assert options.popup is not None
    assert "Bus #&lt;1&gt;" in options.popup
    assert "Late &amp; full UP" in options.popup
