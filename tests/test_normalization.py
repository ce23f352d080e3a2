from __future__ import annotations

import logging

import pytest

from conftest import EMPTY_FEED, ERROR_FEED, TWO_BUS_FEED
from pyzonar.config import MalformedRecordPolicy
from pyzonar.exceptions import ZonarEmptyFeedError, ZonarParseError, ZonarUpstreamError
from pyzonar.ingestion.feed import normalize_feed
from pyzonar.ingestion.normalize import as_list, flatten_element, safe_float, text_of

MISSING_SPEED_FEED = """<currentlocations>
  <asset fleet="101"><lat>10.0</lat><long>20.0</long><speed unit="Mile/Hour">5</speed><time>1700000000</time></asset>
  <asset fleet="102"><lat>11.0</lat><long>21.0</long><time>1700000001</time></asset>
  <asset fleet="103"><lat>12.0</lat><long>22.0</long><speed>7.5</speed><time>1700000002</time></asset>
</currentlocations>
"""

SINGLE_ASSET_FEED = """<currentlocations>
  <asset id="5001" fleet="101"><lat>10.0</lat><long>20.0</long><speed>5</speed><time>1700000000</time></asset>
</currentlocations>
"""

# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def test_as_list_normalizes_cardinality() -> None:
    entry = {"@fleet": "101"}
    assert as_list(None) == []
    assert as_list(entry) == [entry]
    assert as_list([entry, entry]) == [entry, entry]


def test_safe_float_rejects_placeholders() -> None:
    assert safe_float("10.5") == 10.5
    assert safe_float("") is None
    assert safe_float("--") is None
    assert safe_float("nan") is None
    assert safe_float("abc") is None
    assert safe_float("inf") is None
    assert safe_float("-inf") is None
    assert safe_float("1e400") is None


def test_text_of_reads_text_next_to_attributes() -> None:
    assert text_of({"@unit": "Mile/Hour", "#text": "5"}) == "5"
    assert text_of({"@unit": "Mile/Hour"}) is None
    assert text_of(" 7 ") == "7"
    assert text_of(["1", "2"]) == "1"


def test_flatten_element_keeps_child_attributes() -> None:
    flat = flatten_element(
        {
            "@id": "5001",
            "@fleet": "101",
            "lat": "10.0",
            "speed": {"@unit": "Mile/Hour", "#text": "5"},
        }
    )

    assert flat == {"id": "5001", "fleet": "101", "lat": "10.0", "speed": "5", "speed_unit": "Mile/Hour"}


# ------------------------------------------------------------------
# normalize_feed
# ------------------------------------------------------------------


def test_two_bus_feed_parses_in_document_order() -> None:
    snapshot = normalize_feed(TWO_BUS_FEED)

    assert [asset.fleet_id for asset in snapshot.assets] == ["101", "102"]
    assert snapshot.skipped == 0
    first = snapshot.assets[0]
    assert first.latitude == 10.0
    assert first.longitude == 20.0
    assert first.speed == 5.0
    assert first.timestamp_unix == "1700000000"
    assert first.speed_unit == "Mile/Hour"
    assert first.db_id == "5001"
    assert first.heading == 90.0
    assert first.power == "on"
    assert snapshot.assets[1].heading is None


def test_single_and_list_forms_normalize_identically(monkeypatch: pytest.MonkeyPatch) -> None:
    entry = {"@fleet": "101", "lat": "10.0", "long": "20.0", "speed": {"#text": "5"}, "time": "1700000000"}

    monkeypatch.setattr("pyzonar.ingestion.feed.xmltodict.parse", lambda _text: {"currentlocations": {"asset": entry}})
    single = normalize_feed("<ignored/>")
    monkeypatch.setattr(
        "pyzonar.ingestion.feed.xmltodict.parse", lambda _text: {"currentlocations": {"asset": [entry]}}
    )
    wrapped = normalize_feed("<ignored/>")

    assert len(single) == 1
    assert single == wrapped


def test_single_asset_document_is_one_element_snapshot() -> None:
    snapshot = normalize_feed(SINGLE_ASSET_FEED)

    assert len(snapshot) == 1
    assert snapshot.assets[0].fleet_id == "101"


def test_error_envelope_raises_upstream_error() -> None:
    with pytest.raises(ZonarUpstreamError) as exc_info:
        normalize_feed(ERROR_FEED)

    assert str(exc_info.value) == "Invalid username or password"
    assert exc_info.value.code == "3"


def test_bare_error_element_still_raises_upstream_error() -> None:
    with pytest.raises(ZonarUpstreamError, match="account locked"):
        normalize_feed("<error>account locked</error>")


def test_empty_container_raises_empty_feed() -> None:
    with pytest.raises(ZonarEmptyFeedError):
        normalize_feed(EMPTY_FEED)


def test_missing_container_raises_empty_feed() -> None:
    with pytest.raises(ZonarEmptyFeedError):
        normalize_feed("<assets><asset fleet='101'/></assets>")


def test_malformed_entry_is_excluded_by_default(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="pyzonar.ingestion.feed"):
        snapshot = normalize_feed(MISSING_SPEED_FEED)

    assert [asset.fleet_id for asset in snapshot.assets] == ["101", "103"]
    assert snapshot.skipped == 1
    assert "Excluded 1 malformed" in caplog.text


def test_malformed_entry_fails_parse_under_strict_policy() -> None:
    with pytest.raises(ZonarParseError):
        normalize_feed(MISSING_SPEED_FEED, policy=MalformedRecordPolicy.STRICT)


def test_non_numeric_time_is_malformed() -> None:
    feed = (
        "<currentlocations>"
        "<asset fleet='1'><lat>1</lat><long>2</long><speed>3</speed><time>soon</time></asset>"
        "</currentlocations>"
    )

    snapshot = normalize_feed(feed)

    assert len(snapshot) == 0
    assert snapshot.skipped == 1


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("time", "1e400"),
        ("time", "inf"),
        ("time", "500000000000"),
        ("lat", "inf"),
        ("long", "-inf"),
        ("speed", "1e400"),
    ],
)
def test_non_finite_or_out_of_range_values_are_malformed(field: str, value: str) -> None:
    values = {"lat": "11.0", "long": "21.0", "speed": "4", "time": "1700000001"}
    values[field] = value
    bad = "".join(f"<{name}>{text}</{name}>" for name, text in values.items())
    feed = (
        "<currentlocations>"
        "<asset fleet='101'><lat>10.0</lat><long>20.0</long><speed>5</speed><time>1700000000</time></asset>"
        f"<asset fleet='102'>{bad}</asset>"
        "</currentlocations>"
    )

    snapshot = normalize_feed(feed)

    assert [asset.fleet_id for asset in snapshot.assets] == ["101"]
    assert snapshot.skipped == 1


def test_non_finite_heading_is_dropped_not_malformed() -> None:
    feed = (
        "<currentlocations>"
        "<asset fleet='101'><lat>1</lat><long>2</long><speed>3</speed>"
        "<heading>inf</heading><time>1700000000</time></asset>"
        "</currentlocations>"
    )

    snapshot = normalize_feed(feed)

    assert len(snapshot) == 1
    assert snapshot.assets[0].heading is None


def test_invalid_xml_raises_parse_error() -> None:
    with pytest.raises(ZonarParseError):
        normalize_feed("<currentlocations><asset>")
