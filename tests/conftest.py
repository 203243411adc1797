from __future__ import annotations

import pytest

from _helpers import FakeClock, RecordingSurface
from pybuslive.catalog import RouteStopIndex


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def catalog() -> RouteStopIndex:
    return RouteStopIndex.from_mapping(
        {
            "12A": [
                {"lat": 19.00, "lng": 72.80, "stop_name": "X"},
                {"lat": 19.01, "lng": 72.81, "stop_name": "Y"},
            ],
            "7": [
                {"lat": 19.10, "lng": 72.90, "stop_name": "Depot"},
                {"lat": 19.11, "lng": 72.91, "stop_name": "Market"},
                {"lat": 19.12, "lng": 72.92},
                {"lat": 19.13, "lng": 72.93, "stop_name": "Terminus"},
            ],
        }
    )
