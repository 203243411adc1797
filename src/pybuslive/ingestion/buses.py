"""Active-bus and search ingestion + parsing."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pybuslive._api.buses import request_active_buses, request_search
from pybuslive._transport import Transport
from pybuslive.ingestion.normalize import coerce_item_list
from pybuslive.models.suggestion import Suggestion
from pybuslive.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


def parse_items(model: type[TModel], items: list[Any]) -> list[TModel]:
    """Validate each item, skipping the ones that do not fit ``model``."""
    parsed: list[TModel] = []
    for position, item in enumerate(items):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError:
            _logger.debug("Skipping %s item %d: %r", model.__name__, position, item, exc_info=True)
    return parsed


async def fetch_active_buses(transport: Transport, route_no: str) -> list[Vehicle]:
    """Fetch and parse active buses; a non-list payload yields ``[]``."""
    payload = await request_active_buses(transport, route_no)
    if not isinstance(payload, list):
        _logger.debug("Active buses for %s: unexpected payload type %s", route_no, type(payload).__name__)
        return []
    return parse_items(Vehicle, payload)


async def fetch_suggestions(transport: Transport, query: str) -> list[Suggestion]:
    """Fetch and parse route suggestions.

    Accepts either a bare array or ``{"response": [...]}``; anything else
    is an empty result.
    """
    payload = await request_search(transport, query)
    return parse_items(Suggestion, coerce_item_list(payload))
