"""Asset and feed snapshot models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyzonar.ingestion.normalize import safe_float, safe_str
from pyzonar.models._base import ZonarBaseModel, parse_zonar_timestamp


class Asset(ZonarBaseModel):
    """One vehicle's latest reported position.

    ``fleet_id``, ``latitude``, ``longitude``, ``speed`` and
    ``timestamp_unix`` are required; validation fails when any of them
    is absent or unparseable, which is how the normalizer detects a
    malformed entry.

    Parameters
    ----------
    fleet_id : str
        Fleet number, the primary lookup key.
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    speed : float
        Reported speed, in ``speed_unit`` when given.
    timestamp_unix : str
        Epoch seconds of the fix, exactly as Zonar sent it.
    db_id : str or None
        Zonar database id of the asset.
    vin : str or None
        Vehicle Identification Number, when the report carries it.
    tag : str or None
        Asset tag, when the report carries it.
    speed_unit : str or None
        Unit attribute of the ``<speed>`` element.
    heading : float or None
        Heading in degrees.
    power : str or None
        Ignition/power state text.
    raw : dict
        The flattened feed entry this asset was built from.
    """

    fleet_id: str = Field(validation_alias=AliasChoices("fleet", "fleetId", "fleet_id"))
    latitude: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    longitude: float = Field(validation_alias=AliasChoices("long", "lon", "longitude"))
    speed: float = Field(validation_alias=AliasChoices("speed"))
    timestamp_unix: str = Field(validation_alias=AliasChoices("time", "timestampUnix", "timestamp_unix"))
    db_id: str | None = Field(default=None, validation_alias=AliasChoices("id", "dbid", "db_id"))
    vin: str | None = Field(default=None, validation_alias=AliasChoices("vin"))
    tag: str | None = Field(default=None, validation_alias=AliasChoices("tag"))
    speed_unit: str | None = Field(default=None, validation_alias=AliasChoices("speed_unit", "speedUnit"))
    heading: float | None = Field(default=None, validation_alias=AliasChoices("heading"))
    power: str | None = Field(default=None, validation_alias=AliasChoices("power"))
    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("latitude", "longitude", "speed", "heading", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("fleet_id", "db_id", "vin", "tag", "speed_unit", "power", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("timestamp_unix", mode="before")
    @classmethod
    def _require_numeric_timestamp(cls, value: Any) -> str | None:
        text = safe_str(value)
        if text is None or parse_zonar_timestamp(text) is None:
            return None
        return text

    @property
    def timestamp_utc(self) -> datetime | None:
        """Fix time as a timezone-aware UTC datetime."""
        return parse_zonar_timestamp(self.timestamp_unix)


class FeedSnapshot(ZonarBaseModel):
    """Ordered, immutable result of one normalization pass.

    Asset order is the order of ``<asset>`` elements in the document.
    """

    assets: tuple[Asset, ...] = ()
    skipped: int = 0
    """Number of malformed entries left out of ``assets``."""

    def __len__(self) -> int:
        return len(self.assets)
