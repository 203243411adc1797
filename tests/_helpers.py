"""Simulated clock and recording map surface shared by the test modules."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any

from pybuslive.models.geo import Coordinate
from pybuslive.render.surface import LineStyle, MarkerOptions


async def settle(rounds: int = 20) -> None:
    """Let every ready task run until the loop goes quiet."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeClock:
    """Simulated clock; pass ``clock.sleep`` where a scheduler takes ``sleep``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = itertools.count()
        self._sleepers: list[tuple[float, int, asyncio.Future[None]]] = []

    async def sleep(self, delay: float) -> None:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self.now + delay, next(self._seq), future))
        await future

    @property
    def sleepers(self) -> int:
        return sum(1 for _, _, fut in self._sleepers if not fut.done())

    async def advance(self, delta: float) -> None:
        target = self.now + delta
        await settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            deadline, _, future = heapq.heappop(self._sleepers)
            self.now = deadline
            if not future.done():
                future.set_result(None)
            await settle()
        self.now = target
        await settle()


@dataclass
class RecordingSurface:
    """In-memory map surface that records every call."""

    layers: dict[int, tuple[str, Any, Any]] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def draw_line(self, points: list[Coordinate], style: LineStyle) -> int:
        handle = next(self._ids)
        self.layers[handle] = ("line", list(points), style)
        self.calls.append(("draw_line", handle))
        return handle

    def draw_marker(self, point: Coordinate, options: MarkerOptions) -> int:
        handle = next(self._ids)
        self.layers[handle] = ("marker", point, options)
        self.calls.append(("draw_marker", handle))
        return handle

    def remove_layer(self, handle: int) -> None:
        assert handle in self.layers, f"double release of handle {handle}"
        del self.layers[handle]
        self.calls.append(("remove_layer", handle))

    def pan_to(self, point: Coordinate) -> None:
        self.calls.append(("pan_to", point))

    def set_view(self, point: Coordinate, zoom: int) -> None:
        self.calls.append(("set_view", (point, zoom)))

    def of_kind(self, kind: str) -> list[tuple[str, Any, Any]]:
        return [layer for layer in self.layers.values() if layer[0] == kind]

    def view_changes(self) -> list[tuple[str, Any]]:
        return [call for call in self.calls if call[0] in ("pan_to", "set_view")]
