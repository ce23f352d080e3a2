from __future__ import annotations

from datetime import UTC

from conftest import TWO_BUS_FEED
from pyzonar.ingestion.feed import normalize_feed
from pyzonar.models._base import parse_zonar_timestamp
from pyzonar.responses import (
    asset_metadata,
    readable_timestamp,
    to_fetch_document,
    to_location,
    to_search_results,
)


def _assets():
    return normalize_feed(TWO_BUS_FEED).assets


def test_location_shape() -> None:
    location = to_location(_assets()[0])

    assert set(location) == {"latitude", "longitude", "speed", "timestampUnix", "timestampReadable"}
    assert location["latitude"] == 10.0
    assert location["longitude"] == 20.0
    assert location["speed"] == 5
    assert location["timestampUnix"] == "1700000000"
    assert isinstance(location["timestampReadable"], str)
    assert location["timestampReadable"]


def test_readable_timestamp_is_stable_within_a_process() -> None:
    first = readable_timestamp("1700000000")
    second = readable_timestamp("1700000000")

    assert first
    assert first == second


def test_readable_timestamp_treats_milliseconds_like_seconds() -> None:
    assert readable_timestamp("1700000000000", UTC) == readable_timestamp("1700000000", UTC)


def test_out_of_range_timestamps_do_not_raise() -> None:
    assert parse_zonar_timestamp("500000000000") is None
    assert parse_zonar_timestamp("1e400") is None
    assert readable_timestamp("500000000000") == "500000000000"


def test_search_results_one_entry_per_asset() -> None:
    body = to_search_results(_assets())

    assert [entry["id"] for entry in body["results"]] == ["101", "102"]
    for entry in body["results"]:
        assert set(entry) == {"id", "title", "text", "url"}
        assert entry["url"] is None
        assert entry["id"] in entry["title"]

    text = body["results"][0]["text"]
    assert "10" in text
    assert "20" in text
    assert "Mile/Hour" in text
    assert readable_timestamp("1700000000") in text


def test_search_results_empty() -> None:
    assert to_search_results([]) == {"results": []}


def test_fetch_document_shape() -> None:
    document = to_fetch_document(_assets()[0])

    assert set(document) == {"id", "title", "text", "url", "metadata"}
    assert document["id"] == "101"
    assert document["url"] is None
    assert document["title"] == to_search_results(_assets()[:1])["results"][0]["title"]


def test_metadata_is_flat_and_omits_missing_fields() -> None:
    first, second = _assets()

    metadata = asset_metadata(first)
    assert metadata == {
        "fleetId": "101",
        "latitude": 10.0,
        "longitude": 20.0,
        "speed": 5.0,
        "timestampUnix": "1700000000",
        "dbId": "5001",
        "speedUnit": "Mile/Hour",
        "heading": 90.0,
        "power": "on",
    }
    assert all(isinstance(value, (str, int, float)) for value in metadata.values())
    assert "heading" not in asset_metadata(second)


def test_mapping_is_deterministic_apart_from_readable_time() -> None:
    asset = _assets()[1]

    assert to_fetch_document(asset) == to_fetch_document(asset)
    assert to_search_results([asset]) == to_search_results([asset])
