"""Data models for Zonar feed records."""

from pyzonar.models._base import ZonarBaseModel, parse_zonar_timestamp
from pyzonar.models.asset import Asset, FeedSnapshot

__all__ = [
    "Asset",
    "FeedSnapshot",
    "ZonarBaseModel",
    "parse_zonar_timestamp",
]
