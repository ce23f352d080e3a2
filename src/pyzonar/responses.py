"""Map assets to the JSON shapes promised by each tool's output schema.

Every function here is pure apart from :func:`readable_timestamp`,
whose output depends on the locale and time zone of the process.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import tzinfo
from typing import Any

from pyzonar.models._base import parse_zonar_timestamp
from pyzonar.models.asset import Asset

TITLE_TEMPLATE = "Bus {id}"
TEXT_TEMPLATE = "Bus {id} is at latitude {latitude}, longitude {longitude}, speed {speed}{unit} as of {readable}."


def readable_timestamp(timestamp_unix: str | int, tz: tzinfo | None = None) -> str:
    """Render an epoch timestamp for humans.

    Uses the locale's date-and-time representation, in *tz* or in the
    local time zone of the process when *tz* is ``None``.
    """
    moment = parse_zonar_timestamp(timestamp_unix)
    if moment is None:
        return str(timestamp_unix)
    return moment.astimezone(tz).strftime("%c")


def _number(value: float) -> int | float:
    return int(value) if value.is_integer() else value


def to_location(asset: Asset, *, tz: tzinfo | None = None) -> dict[str, Any]:
    """Output of ``get_bus_location`` for exactly one asset."""
    return {
        "latitude": asset.latitude,
        "longitude": asset.longitude,
        "speed": asset.speed,
        "timestampUnix": asset.timestamp_unix,
        "timestampReadable": readable_timestamp(asset.timestamp_unix, tz),
    }


def summary_title(asset: Asset) -> str:
    return TITLE_TEMPLATE.format(id=asset.fleet_id)


def summary_text(asset: Asset, *, tz: tzinfo | None = None) -> str:
    return TEXT_TEMPLATE.format(
        id=asset.fleet_id,
        latitude=_number(asset.latitude),
        longitude=_number(asset.longitude),
        speed=_number(asset.speed),
        unit=f" {asset.speed_unit}" if asset.speed_unit else "",
        readable=readable_timestamp(asset.timestamp_unix, tz),
    )


def to_search_results(assets: Iterable[Asset], *, tz: tzinfo | None = None) -> dict[str, Any]:
    """Output of ``search``: one result entry per asset, in input order."""
    return {
        "results": [
            {
                "id": asset.fleet_id,
                "title": summary_title(asset),
                "text": summary_text(asset, tz=tz),
                "url": None,
            }
            for asset in assets
        ]
    }


def asset_metadata(asset: Asset) -> dict[str, str | int | float]:
    """Flat mapping of the raw fields of *asset*; optional fields only when present."""
    metadata: dict[str, str | int | float] = {
        "fleetId": asset.fleet_id,
        "latitude": asset.latitude,
        "longitude": asset.longitude,
        "speed": asset.speed,
        "timestampUnix": asset.timestamp_unix,
    }
    optional: dict[str, str | float | None] = {
        "dbId": asset.db_id,
        "vin": asset.vin,
        "tag": asset.tag,
        "speedUnit": asset.speed_unit,
        "heading": asset.heading,
        "power": asset.power,
    }
    metadata.update({key: value for key, value in optional.items() if value is not None})
    return metadata


def to_fetch_document(asset: Asset, *, tz: tzinfo | None = None) -> dict[str, Any]:
    """Output of ``fetch`` for exactly one asset."""
    return {
        "id": asset.fleet_id,
        "title": summary_title(asset),
        "text": summary_text(asset, tz=tz),
        "url": None,
        "metadata": asset_metadata(asset),
    }
