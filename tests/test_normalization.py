from __future__ import annotations

import pytest

from pybuslive.ingestion.buses import parse_items
from pybuslive.ingestion.normalize import coerce_item_list, normalize_route_key, safe_float, safe_str
from pybuslive.models.suggestion import Suggestion


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1, 1.0),
        ("2.5", 2.5),
        (" 3 ", 3.0),
        ("", None),
        ("--", None),
        (None, None),
        (True, None),
        ("nan", None),
        (float("inf"), None),
        ("x", None),
    ],
)
def test_safe_float(value: object, expected: float | None) -> None:
    assert safe_float(value) == expected


def test_safe_str() -> None:
    assert safe_str(" a ") == "a"
    assert safe_str(12) == "12"
    assert safe_str("   ") is None
    assert safe_str(None) is None


def test_normalize_route_key() -> None:
    assert normalize_route_key(" 12a ") == "12A"
    assert normalize_route_key(None) == ""
    assert normalize_route_key(7) == "7"


def test_bare_array_is_used_as_is() -> None:
    items = [{"route_no": "1"}]
    assert coerce_item_list(items) is items


def test_wrapped_array_is_unwrapped() -> None:
    assert coerce_item_list({"response": [{"route_no": "1"}]}) == [{"route_no": "1"}]


@pytest.mark.parametrize("payload", [None, "text", 3, {}, {"response": "nope"}, {"data": []}])
def test_other_shapes_become_empty(payload: object) -> None:
    assert coerce_item_list(payload) == []


def test_parse_items_skips_invalid_entries() -> None:
    parsed = parse_items(Suggestion, [{"route_no": "1"}, "garbage", 42, {"route_no": "2", "source": "A"}])
    assert [item.route_no for item in parsed] == ["1", "2"]
