"""Rendering surface interface and shape styles."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from enum import StrEnum
from typing import Any, Protocol

from pybuslive.models.geo import Coordinate

#: Opaque value identifying a drawn shape on a surface.
OverlayHandle = Any


class MarkerKind(StrEnum):
    DOT = "dot"
    """Small filled circle, used for stops."""
    ICON = "icon"
    """HTML icon marker, used for buses."""


@dataclasses.dataclass(frozen=True)
class LineStyle:
    color: str
    weight: int
    opacity: float = 1.0
    line_join: str = "round"


@dataclasses.dataclass(frozen=True)
class MarkerOptions:
    """How to draw a point marker.

    Parameters
    ----------
    kind : MarkerKind
        Dot or icon marker.
    title : str or None
        Hover text for icon markers.
    tooltip : str or None
        Tooltip label.
    popup : str or None
        Popup content (HTML allowed).
    color, fill_color : str
        Stroke and fill colours of dot markers.
    radius : int
        Dot radius in pixels.
    weight : int
        Dot stroke width.
    fill_opacity : float
        Dot fill opacity.
    icon_html : str or None
        Markup of icon markers.
    icon_size : tuple of int
        Icon size in pixels; the anchor is its centre.
    """

    kind: MarkerKind = MarkerKind.DOT
    title: str | None = None
    tooltip: str | None = None
    popup: str | None = None
    color: str = "#3388ff"
    fill_color: str = "#3388ff"
    radius: int = 4
    weight: int = 1
    fill_opacity: float = 1.0
    icon_html: str | None = None
    icon_size: tuple[int, int] = (28, 28)


class MapSurface(Protocol):
    """What the overlay layer needs from a map.

    Handles returned by the draw methods are owned by the caller until
    passed back to :meth:`remove_layer`.
    """

    def draw_line(self, points: Sequence[Coordinate], style: LineStyle) -> OverlayHandle:
        ...

    def draw_marker(self, point: Coordinate, options: MarkerOptions) -> OverlayHandle:
        ...

    def remove_layer(self, handle: OverlayHandle) -> None:
        ...

    def pan_to(self, point: Coordinate) -> None:
        ...

    def set_view(self, point: Coordinate, zoom: int) -> None:
        ...
