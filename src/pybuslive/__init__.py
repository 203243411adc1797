"""pybuslive - Async live bus tracking with nearest-stop estimates."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybuslive")
except PackageNotFoundError:
    __version__ = "0+local"
from pybuslive.catalog import RouteStopIndex
from pybuslive.client import BusLiveClient
from pybuslive.config import BusLiveConfig
from pybuslive.exceptions import (
    BusLiveCatalogError,
    BusLiveConfigError,
    BusLiveError,
    BusLiveTransportError,
)
from pybuslive.geo import bounds_center, haversine_distance
from pybuslive.locator import estimate_for_vehicles, locate
from pybuslive.models import (
    Coordinate,
    Direction,
    Route,
    SearchState,
    Stop,
    StopEstimate,
    Suggestion,
    TrackerState,
    Vehicle,
)
from pybuslive.overlay import OverlayLayerManager
from pybuslive.render import FoliumSurface, LineStyle, MapSurface, MarkerKind, MarkerOptions
from pybuslive.scheduling import CancellableRequestSlot, DebounceScheduler, PollingScheduler, PollState
from pybuslive.search import RouteSearch
from pybuslive.tracker import RouteTracker

__all__ = [
    "__version__",
    "BusLiveCatalogError",
    "BusLiveClient",
    "BusLiveConfig",
    "BusLiveConfigError",
    "BusLiveError",
    "BusLiveTransportError",
    "CancellableRequestSlot",
    "Coordinate",
    "DebounceScheduler",
    "Direction",
    "FoliumSurface",
    "LineStyle",
    "MapSurface",
    "MarkerKind",
    "MarkerOptions",
    "OverlayLayerManager",
    "PollState",
    "PollingScheduler",
    "Route",
    "RouteSearch",
    "RouteStopIndex",
    "RouteTracker",
    "SearchState",
    "Stop",
    "StopEstimate",
    "Suggestion",
    "TrackerState",
    "Vehicle",
    "bounds_center",
    "estimate_for_vehicles",
    "haversine_distance",
    "locate",
]
