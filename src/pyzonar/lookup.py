"""Exact lookup and substring search over a :class:`FeedSnapshot`."""

from __future__ import annotations

import enum

from pyzonar.models.asset import Asset, FeedSnapshot


class IdType(enum.StrEnum):
    """Which asset identifier a query is matched against."""

    FLEET = "fleet"
    DBID = "dbid"
    VIN = "vin"
    TAG = "tag"


_ID_FIELDS: dict[IdType, str] = {
    IdType.FLEET: "fleet_id",
    IdType.DBID: "db_id",
    IdType.VIN: "vin",
    IdType.TAG: "tag",
}


def asset_identifier(asset: Asset, id_type: IdType = IdType.FLEET) -> str | None:
    """Return the identifier of *asset* selected by *id_type*."""
    value: str | None = getattr(asset, _ID_FIELDS[IdType(id_type)])
    return value


def find_exact(snapshot: FeedSnapshot, query: str, id_type: IdType = IdType.FLEET) -> Asset | None:
    """Return the first asset whose identifier equals *query* (case-sensitive).

    ``None`` means no asset matched.
    """
    for asset in snapshot.assets:
        if asset_identifier(asset, id_type) == query:
            return asset
    return None


def search_substring(snapshot: FeedSnapshot, query: str, id_type: IdType = IdType.FLEET) -> list[Asset]:
    """Return every asset whose identifier contains *query*, ignoring case.

    An empty query matches every asset. Results keep snapshot order.
    Assets without the selected identifier never match.
    """
    needle = query.casefold()
    matches: list[Asset] = []
    for asset in snapshot.assets:
        identifier = asset_identifier(asset, id_type)
        if identifier is not None and needle in identifier.casefold():
            matches.append(asset)
    return matches
