#!/usr/bin/env python3
"""Follow the buses of one route against a live backend.

Examples::

    python scripts/track_route.py 12A --routes routes.json --html map.html
    python scripts/track_route.py --search "andheri"

Configuration comes from ``BUSLIVE_*`` environment variables (see
``pybuslive.config``); command-line flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybuslive import (  # noqa: E402
    BusLiveClient,
    BusLiveConfig,
    BusLiveError,
    FoliumSurface,
    RouteSearch,
    RouteStopIndex,
    RouteTracker,
    SearchState,
    TrackerState,
)
from pybuslive.models.geo import Coordinate  # noqa: E402

_logger = logging.getLogger("track_route")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("route", nargs="?", help="Route number to track (e.g. 12A)")
    parser.add_argument("--search", metavar="TEXT", help="Print route suggestions for TEXT and exit")
    parser.add_argument("--base-url", help="Backend base URL")
    parser.add_argument("--routes", help="Route catalog JSON file")
    parser.add_argument("--interval", type=float, help="Seconds between polls")
    parser.add_argument("--cycles", type=int, default=0, help="Stop after N applied cycles (0 = run until Ctrl+C)")
    parser.add_argument("--html", type=Path, help="Write the map to this HTML file after every cycle")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if not args.route and not args.search:
        parser.error("either a route or --search is required")
    return args


def _build_config(args: argparse.Namespace) -> BusLiveConfig:
    overrides: dict[str, object] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.routes:
        overrides["routes_file"] = args.routes
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    return BusLiveConfig.from_env(**overrides)


def _load_catalog(config: BusLiveConfig) -> RouteStopIndex:
    if config.routes_file is None:
        _logger.warning("No route catalog given; stops and estimates will be unavailable")
        return RouteStopIndex({})
    return RouteStopIndex.from_json(config.routes_file)


async def _run_search(config: BusLiveConfig, text: str) -> int:
    done = asyncio.Event()
    seen_loading = False

    def _on_change(state: SearchState) -> None:
        nonlocal seen_loading
        if state.loading:
            seen_loading = True
        elif seen_loading:
            done.set()

    async with BusLiveClient(config) as client:
        async with RouteSearch(client, config=config, on_change=_on_change) as search:
            search.search_now(text)
            if text.strip():
                await done.wait()
            state = search.state

    if state.error:
        print(state.error, file=sys.stderr)
        return 1
    for item in state.suggestions:
        print(f"{item.route_no:<8} {item.label}")
    return 0


async def _run_tracker(config: BusLiveConfig, route: str, cycles: int, html_path: Path | None) -> int:
    catalog = _load_catalog(config)
    lat, lng = config.map_center
    surface = FoliumSurface(center=Coordinate(lat=lat, lng=lng), zoom=config.map_zoom)
    finished = asyncio.Event()

    def _on_update(state: TrackerState) -> None:
        if state.error:
            _logger.warning("%s: %s", state.route_no, state.error)
            return
        if state.cycles_applied == 0:
            return
        _logger.info(
            "%s: %d buses | current stop: %s | next stop: %s%s",
            state.route_no,
            len(state.vehicles),
            state.current_stop or "-",
            state.next_stop or "-",
            f" | {state.notice}" if state.notice else "",
        )
        if html_path is not None:
            surface.save(html_path)
        if cycles and state.cycles_applied >= cycles:
            finished.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, finished.set)
        except NotImplementedError:
            pass

    async with BusLiveClient(config) as client:
        async with RouteTracker(client, catalog, surface, config=config, on_update=_on_update) as tracker:
            state = tracker.show_route(route)
            if not state.route_known:
                _logger.info("Route %s has no stop data; only bus positions will be shown", state.route_no)
            await finished.wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = _build_config(args)
        if args.search:
            return asyncio.run(_run_search(config, args.search))
        return asyncio.run(_run_tracker(config, args.route, args.cycles, args.html))
    except BusLiveError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
