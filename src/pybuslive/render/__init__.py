"""Rendering surfaces the overlay layer can draw on."""

from pybuslive.render.folium_surface import FoliumSurface
from pybuslive.render.surface import LineStyle, MapSurface, MarkerKind, MarkerOptions, OverlayHandle

__all__ = [
    "FoliumSurface",
    "LineStyle",
    "MapSurface",
    "MarkerKind",
    "MarkerOptions",
    "OverlayHandle",
]
