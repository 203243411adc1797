"""folium-backed :class:`~pybuslive.render.surface.MapSurface`.

folium renders a static Leaflet page, so the surface keeps the live set
of shapes itself and builds a fresh :class:`folium.Map` on demand. Each
build reflects exactly the layers that have not been removed.
"""

from __future__ import annotations

import dataclasses
import html
import itertools
import logging
from collections.abc import Sequence
from pathlib import Path

import folium

from pybuslive._constants import DEFAULT_MAP_CENTER, DEFAULT_MAP_ZOOM
from pybuslive.models.geo import Coordinate
from pybuslive.render.surface import LineStyle, MarkerKind, MarkerOptions

_logger = logging.getLogger(__name__)


def _tooltip_text(text: str | None) -> str | None:
    """Escape plain text for a folium tooltip.

    folium writes tooltip text into a JS template literal that Leaflet
    renders as HTML.
    """
    if not text:
        return None
    return html.escape(text).replace("`", "&#96;").replace("$", "&#36;")


@dataclasses.dataclass(frozen=True)
class _LineLayer:
    points: tuple[tuple[float, float], ...]
    style: LineStyle


@dataclasses.dataclass(frozen=True)
class _MarkerLayer:
    point: tuple[float, float]
    options: MarkerOptions


class FoliumSurface:
    """Collects shapes and renders them with folium.

    Handles are increasing integers; removing an unknown handle is a no-op.
    """

    def __init__(
        self,
        *,
        center: Coordinate | None = None,
        zoom: int = DEFAULT_MAP_ZOOM,
        tiles: str = "OpenStreetMap",
        max_zoom: int = 19,
    ) -> None:
        self._center = center or Coordinate(lat=DEFAULT_MAP_CENTER[0], lng=DEFAULT_MAP_CENTER[1])
        self._zoom = zoom
        self._tiles = tiles
        self._max_zoom = max_zoom
        self._ids = itertools.count(1)
        self._layers: dict[int, _LineLayer | _MarkerLayer] = {}

    @property
    def center(self) -> Coordinate:
        return self._center

    @property
    def zoom(self) -> int:
        return self._zoom

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    # ------------------------------------------------------------------
    # MapSurface
    # ------------------------------------------------------------------

    def draw_line(self, points: Sequence[Coordinate], style: LineStyle) -> int:
        handle = next(self._ids)
        self._layers[handle] = _LineLayer(points=tuple(p.as_tuple() for p in points), style=style)
        return handle

    def draw_marker(self, point: Coordinate, options: MarkerOptions) -> int:
        handle = next(self._ids)
        self._layers[handle] = _MarkerLayer(point=point.as_tuple(), options=options)
        return handle

    def remove_layer(self, handle: int) -> None:
        if self._layers.pop(handle, None) is None:
            _logger.debug("remove_layer: unknown handle %r", handle)

    def pan_to(self, point: Coordinate) -> None:
        self._center = point

    def set_view(self, point: Coordinate, zoom: int) -> None:
        self._center = point
        self._zoom = zoom

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build_map(self) -> folium.Map:
        """A new :class:`folium.Map` holding every live layer."""
        fmap = folium.Map(
            location=list(self._center.as_tuple()),
            zoom_start=self._zoom,
            tiles=self._tiles,
            max_zoom=self._max_zoom,
        )
        for layer in self._layers.values():
            if isinstance(layer, _LineLayer):
                self._add_line(fmap, layer)
            else:
                self._add_marker(fmap, layer)
        return fmap

    def render_html(self) -> str:
        return self.build_map().get_root().render()

    def save(self, path: str | Path) -> None:
        self.build_map().save(str(path))
        _logger.debug("Saved map with %d layers to %s", len(self._layers), path)

    @staticmethod
    def _add_line(fmap: folium.Map, layer: _LineLayer) -> None:
        folium.PolyLine(
            locations=[list(p) for p in layer.points],
            color=layer.style.color,
            weight=layer.style.weight,
            opacity=layer.style.opacity,
            line_join=layer.style.line_join,
        ).add_to(fmap)

    @staticmethod
    def _add_marker(fmap: folium.Map, layer: _MarkerLayer) -> None:
        opts = layer.options
        popup = folium.Popup(opts.popup) if opts.popup else None
        if opts.kind is MarkerKind.DOT:
            folium.CircleMarker(
                location=list(layer.point),
                radius=opts.radius,
                color=opts.color,
                weight=opts.weight,
                fill=True,
                fill_color=opts.fill_color,
                fill_opacity=opts.fill_opacity,
                tooltip=_tooltip_text(opts.tooltip),
                popup=popup,
            ).add_to(fmap)
            return
        width, height = opts.icon_size
        icon = folium.DivIcon(
            html=opts.icon_html or "",
            icon_size=(width, height),
            icon_anchor=(width // 2, height // 2),
            class_name="bus-marker",
        )
        folium.Marker(
            location=list(layer.point),
            tooltip=_tooltip_text(opts.tooltip),
            popup=popup,
            icon=icon,
            title=opts.title or "",
        ).add_to(fmap)
