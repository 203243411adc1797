"""Internal constants shared across the library."""

BASE_URL = "http://localhost:8000"
USER_AGENT = "pybuslive/0.1"

#: Mean Earth radius used by the haversine formula, in metres.
EARTH_RADIUS_M = 6_371_000.0

POLL_INTERVAL_S = 7.0
SEARCH_DEBOUNCE_S = 0.3

# Roughly the Mumbai region, where the first deployment's routes live.
DEFAULT_MAP_CENTER: tuple[float, float] = (19.076, 72.878)
DEFAULT_MAP_ZOOM = 11

# ------------------------------------------------------------------
# User-visible status strings
# ------------------------------------------------------------------

ACTIVE_BUSES_ERROR = "Failed to fetch active buses"
SUGGESTIONS_ERROR = "Failed to fetch suggestions"
NO_STOP_DATA = "No stop data available"

# ------------------------------------------------------------------
# Overlay styling
# ------------------------------------------------------------------

ROUTE_OUTLINE_COLOR = "#ffffff"
ROUTE_OUTLINE_WEIGHT = 8
ROUTE_OUTLINE_OPACITY = 0.9
ROUTE_LINE_COLOR = "#2563eb"
ROUTE_LINE_WEIGHT = 5
ROUTE_LINE_OPACITY = 0.95

STOP_MARKER_COLOR = "#1d4ed8"
STOP_MARKER_RADIUS = 4

BUS_ICON_HTML = '<div style="font-size:28px;line-height:28px">&#128652;</div>'
BUS_ICON_SIZE: tuple[int, int] = (28, 28)
