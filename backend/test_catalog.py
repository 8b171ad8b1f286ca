"""
test_catalog.py
----------------
Bundled catalog lookups, filters and the remote catalog client.

Run:
    cd backend
    pytest test_catalog.py -v
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from modules.errors import CatalogUnavailableError
from modules.tool_usage import catalog_data
from modules.tool_usage.activity_tool import ActivityRecord, ActivityTool
from modules.tool_usage.catalog import (
    activities_for,
    filter_by_proximity,
    filter_by_tags,
    hotels_for,
    preference_score,
)
from modules.tool_usage.catalog_client import fetch_catalog
from modules.tool_usage.distance_tool import Coordinates, city_center, distance_km, haversine_km
from modules.tool_usage.hotel_tool import HotelTool


# ── Bundled catalog ────────────────────────────────────────────────────────────

def test_lookup_is_case_insensitive_exact():
    assert catalog_data.lookup(catalog_data.HOTELS, "italy") == catalog_data.HOTELS["Italy"]
    assert catalog_data.lookup(catalog_data.HOTELS, "  ITALY ") == catalog_data.HOTELS["Italy"]
    assert catalog_data.lookup(catalog_data.HOTELS, "Ital") == []


def test_unknown_destination_yields_empty_lists():
    assert hotels_for("Atlantis", HotelTool(use_stub=True)) == []
    assert activities_for("Atlantis", ActivityTool(use_stub=True)) == []
    assert hotels_for("", HotelTool(use_stub=True)) == []


def test_hotels_parse_into_records():
    hotels = hotels_for("Italy", HotelTool(use_stub=True))
    artemide = next(h for h in hotels if h.id == "rome-premium-1")
    assert artemide.name == "Hotel Artemide"
    assert artemide.price_per_night == 180
    assert artemide.coordinates == Coordinates(41.9009, 12.4942)


def test_activity_parser_normalises_unknown_type_and_slot():
    record = ActivityTool._parse_activity({"id": "x", "type": "Mystery", "time_slot": "midnight", "cost": "12"})
    assert record.type == "activity"
    assert record.time_slot == "flexible"
    assert record.cost == 12
    assert record.fits_slot("morning")


# ── Filters ───────────────────────────────────────────────────────────────────

def _activity(id_: str, tags: list[str], type_: str = "sightseeing", lat=None, lon=None) -> ActivityRecord:
    return ActivityRecord(id=id_, name=id_, type=type_, tags=tags, lat=lat, lon=lon)


def test_filter_by_tags_matches_substrings_and_types():
    items = [
        _activity("a", ["history", "ancient"]),
        _activity("b", ["fine-dining"], type_="restaurant"),
        _activity("c", ["nature"]),
    ]
    assert [a.id for a in filter_by_tags(items, ["dining"])] == ["b"]
    assert [a.id for a in filter_by_tags(items, ["restaurant"])] == ["b"]
    assert [a.id for a in filter_by_tags(items, ["HISTORY", "nature"])] == ["a", "c"]
    assert filter_by_tags(items, []) == items


def test_preference_score_counts_matched_tags():
    a = _activity("a", ["history", "art", "guided"])
    assert preference_score(a, ["history", "art", "food"]) == 2
    assert preference_score(a, []) == 0


def test_filter_by_proximity_keeps_candidates_without_coordinates():
    rome = Coordinates(41.9028, 12.4964)
    near = _activity("near", [], lat=41.9009, lon=12.4942)
    far = _activity("far", [], lat=43.7679, lon=11.2554)
    unknown = _activity("unknown", [])
    assert [a.id for a in filter_by_proximity([near, far, unknown], rome, 5.0)] == ["near", "unknown"]


def test_haversine_rome_to_florence():
    assert 225 < haversine_km(41.9028, 12.4964, 43.7696, 11.2558) < 235
    assert distance_km(Coordinates(1.0, 1.0), Coordinates(1.0, 1.0)) == 0.0
    assert city_center("Italy") is not None
    assert city_center("Atlantis") is None


# ── Remote catalog ────────────────────────────────────────────────────────────

def _response(status: int, payload: dict | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload or {}
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    else:
        resp.raise_for_status.return_value = None
    return resp


@patch("modules.tool_usage.catalog_client.time.sleep")
@patch("modules.tool_usage.catalog_client.requests.get")
def test_fetch_retries_transient_failures(mock_get, mock_sleep):
    mock_get.side_effect = [
        requests.ConnectionError("down"),
        _response(503),
        _response(200, {"hotels": [{"id": "h1"}]}),
    ]
    assert fetch_catalog("hotels", "Italy") == [{"id": "h1"}]
    assert mock_get.call_count == 3
    delays = [c.args[0] for c in mock_sleep.call_args_list]
    assert delays == [0.5, 1.0]


@patch("modules.tool_usage.catalog_client.time.sleep")
@patch("modules.tool_usage.catalog_client.requests.get")
def test_fetch_gives_up_after_max_retries(mock_get, mock_sleep):
    mock_get.side_effect = requests.Timeout("slow")
    with pytest.raises(CatalogUnavailableError) as info:
        fetch_catalog("activities", "Italy")
    assert info.value.attempts == 4
    assert mock_get.call_count == 4


@patch("modules.tool_usage.catalog_client.time.sleep")
@patch("modules.tool_usage.catalog_client.requests.get")
def test_fetch_404_means_no_records(mock_get, mock_sleep):
    mock_get.return_value = _response(404)
    assert fetch_catalog("hotels", "Atlantis") == []
    assert mock_get.call_count == 1
    mock_sleep.assert_not_called()


@patch("modules.tool_usage.hotel_tool.fetch_catalog")
def test_live_hotel_tool_falls_back_to_bundled_catalog(mock_fetch):
    mock_fetch.side_effect = CatalogUnavailableError("http://catalog/hotels", 4)
    hotels = HotelTool(use_stub=False).fetch("Italy")
    assert {h.id for h in hotels} == {row["id"] for row in catalog_data.HOTELS["Italy"]}
