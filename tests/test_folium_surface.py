from __future__ import annotations

from pathlib import Path

import folium
import pytest

from pybuslive.catalog import RouteStopIndex
from pybuslive.models.geo import Coordinate
from pybuslive.models.vehicle import Vehicle
from pybuslive.overlay import OverlayLayerManager
from pybuslive.render.folium_surface import FoliumSurface


def test_route_and_bus_render_to_html(catalog: RouteStopIndex) -> None:
    surface = FoliumSurface()
    overlays = OverlayLayerManager(surface)
    overlays.set_route(catalog.get("7") or ())
    overlays.set_vehicles([Vehicle(bus_id="4411", route_no="7", latitude=19.111, longitude=72.911)])

    html = surface.render_html()

    assert surface.layer_count == 2 + 4 + 1
    assert "Market" in html
    assert "Bus #4411" in html
    assert "bus-marker" in html
    assert surface.center.lat == pytest.approx(19.115)


def test_build_map_reflects_removed_layers(catalog: RouteStopIndex) -> None:
    surface = FoliumSurface()
    overlays = OverlayLayerManager(surface)
    overlays.set_route(catalog.get("12A") or ())
    overlays.set_route(())

    fmap = surface.build_map()

    assert isinstance(fmap, folium.Map)
    assert surface.layer_count == 0
    assert not any(isinstance(child, folium.PolyLine) for child in fmap._children.values())  # noqa: SLF001


def test_remove_unknown_handle_is_noop() -> None:
    surface = FoliumSurface()
    surface.remove_layer(12345)
    assert surface.layer_count == 0


def test_set_view_and_save(tmp_path: Path) -> None:
    surface = FoliumSurface()
    surface.set_view(Coordinate(lat=18.52, lng=73.85), 14)

    target = tmp_path / "map.html"
    surface.save(target)

    assert surface.zoom == 14
    assert surface.center.as_tuple() == (18.52, 73.85)
    assert "<!DOCTYPE html>" in target.read_text(encoding="utf-8")


def test_backend_text_is_escaped_in_rendered_page() -> None:
    surface = FoliumSurface()
    overlays = OverlayLayerManager(surface)
    hostile = "<img src=x onerror=alert(1)>"
    overlays.set_vehicles([Vehicle(bus_id=hostile, route_no="12A", latitude=19.0, longitude=72.8)])

    html = surface.render_html()

    assert hostile not in html
    assert '"title"' in html


def test_stop_tooltip_is_escaped() -> None:
    catalog = RouteStopIndex.from_mapping(
        {"1": [{"lat": 19.0, "lng": 72.8, "stop_name": "<b>Gate</b> `$`"}, {"lat": 19.01, "lng": 72.81}]}
    )
    surface = FoliumSurface()
    OverlayLayerManager(surface).set_route(catalog.get("1") or ())

    html = surface.render_html()

    assert "&lt;b&gt;Gate&lt;/b&gt; &#96;&#36;&#96;" in html
    assert "<b>Gate</b>" not in html
