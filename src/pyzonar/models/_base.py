"""Base model and timestamp helpers for Zonar records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from pyzonar._constants import MS_THRESHOLD


def parse_zonar_timestamp(value: Any) -> datetime | None:
    """Convert a Zonar epoch timestamp (seconds **or** milliseconds) to a UTC datetime.

    Returns ``None`` when the value is ``None``, not numeric, or outside the
    range a datetime can represent.
    """
    if value is None:
        return value
    if isinstance(value, datetime):
        return value
    try:
        ts = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    if ts >= MS_THRESHOLD:
        ts = ts // 1000
    try:
        return datetime.fromtimestamp(ts, tz=UTC)
    except (OverflowError, ValueError, OSError):
        return None


class ZonarBaseModel(BaseModel):
    """Base for immutable Zonar models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
