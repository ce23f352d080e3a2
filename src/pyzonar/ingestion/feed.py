"""Normalize the ``showposition`` XML report into a :class:`FeedSnapshot`.

The report looks like::

    <currentlocations>
      <asset id="1234" fleet="101" type="Standard">
        <long>-122.41</long>
        <lat>37.77</lat>
        <heading>90</heading>
        <speed unit="Mile/Hour">5</speed>
        <power>on</power>
        <time>1700000000</time>
      </asset>
      ...
    </currentlocations>

A rejected request comes back as an ``<error>`` envelope instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import ValidationError

from pyzonar._constants import ASSET_TAG, CURRENT_LOCATIONS_TAG, ERROR_TAG
from pyzonar.config import MalformedRecordPolicy
from pyzonar.exceptions import ZonarEmptyFeedError, ZonarParseError, ZonarUpstreamError
from pyzonar.ingestion.normalize import as_list, flatten_element, safe_str, text_of
from pyzonar.models.asset import Asset, FeedSnapshot

_logger = logging.getLogger(__name__)


def _parse_document(raw_text: str) -> dict[str, Any]:
    try:
        document = xmltodict.parse(raw_text)
    except ExpatError as exc:
        raise ZonarParseError(f"Zonar response is not well-formed XML: {exc}") from exc
    if not isinstance(document, Mapping):
        raise ZonarParseError("Zonar response has no root element")
    return dict(document)


def _raise_for_error_envelope(envelope: Any) -> None:
    """Raise :class:`ZonarUpstreamError` for an ``<error>`` root."""
    code = ""
    message: str | None
    if isinstance(envelope, Mapping):
        message = text_of(envelope.get("message")) or text_of(envelope)
        code = text_of(envelope.get("code")) or ""
    else:
        message = safe_str(envelope)
    raise ZonarUpstreamError(message or "Unknown error", code=code)


def _parse_asset(entry: Any, index: int) -> Asset | None:
    """Build an :class:`Asset` from one raw entry, ``None`` if malformed."""
    if not isinstance(entry, Mapping):
        _logger.debug("Skipping asset #%d: unexpected entry type %s", index, type(entry).__name__)
        return None
    flat = flatten_element(entry)
    try:
        return Asset.model_validate({**flat, "raw": flat})
    except ValidationError as exc:
        missing = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        _logger.debug("Skipping asset #%d (fleet=%s): invalid %s", index, flat.get("fleet"), missing)
        return None


def normalize_feed(
    raw_text: str,
    *,
    policy: MalformedRecordPolicy = MalformedRecordPolicy.EXCLUDE,
) -> FeedSnapshot:
    """Parse raw report text into an ordered snapshot of assets.

    Parameters
    ----------
    raw_text : str
        XML text of the current-position report.
    policy : MalformedRecordPolicy
        ``EXCLUDE`` drops entries missing a required field; ``STRICT``
        raises instead.

    Returns
    -------
    FeedSnapshot
        Assets in document order.

    Raises
    ------
    ZonarUpstreamError
        The root element is Zonar's ``<error>`` envelope.
    ZonarEmptyFeedError
        ``<currentlocations>`` is absent or has no ``<asset>`` entries.
    ZonarParseError
        The text is not XML, or an entry is malformed under ``STRICT``.
    """
    document = _parse_document(raw_text)

    if ERROR_TAG in document:
        _raise_for_error_envelope(document[ERROR_TAG])

    container = document.get(CURRENT_LOCATIONS_TAG)
    entries = as_list(container.get(ASSET_TAG)) if isinstance(container, Mapping) else []
    if not entries:
        raise ZonarEmptyFeedError(f"No assets found in Zonar response (expected <{CURRENT_LOCATIONS_TAG}> tag)")

    assets: list[Asset] = []
    for index, entry in enumerate(entries):
        asset = _parse_asset(entry, index)
        if asset is None:
            if policy == MalformedRecordPolicy.STRICT:
                raise ZonarParseError(f"Asset entry #{index} is missing a required field")
            continue
        assets.append(asset)

    skipped = len(entries) - len(assets)
    if skipped:
        _logger.info("Excluded %d malformed asset entries out of %d", skipped, len(entries))
    _logger.debug("Normalized %d assets", len(assets))

    return FeedSnapshot(assets=tuple(assets), skipped=skipped)
