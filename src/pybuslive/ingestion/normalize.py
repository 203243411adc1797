"""Normalization helpers.

Centralizes defensive parsing of backend payloads.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value in ("", "--"):
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def normalize_route_key(route_no: Any) -> str:
    """Trim and uppercase a route number for catalog lookups."""
    if route_no is None:
        return ""
    return str(route_no).strip().upper()


def coerce_item_list(payload: Any, *, envelope_key: str = "response") -> list[Any]:
    """Return the list carried by a backend payload.

    The search endpoint answers either with a bare JSON array or with an
    object wrapping the array under ``envelope_key``. Any other shape
    yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        wrapped = payload.get(envelope_key)
        if isinstance(wrapped, list):
            return wrapped
    return []
