"""High-level async client for the Zonar current-position feed."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyzonar._transport import FeedTransport, HttpFeedTransport
from pyzonar.config import ZonarConfig
from pyzonar.exceptions import ZonarError
from pyzonar.ingestion.feed import normalize_feed
from pyzonar.lookup import IdType, find_exact, search_substring
from pyzonar.models.asset import Asset, FeedSnapshot

_logger = logging.getLogger(__name__)


class ZonarClient:
    """Async client for the Zonar ``showposition`` report.

    Every call fetches and normalizes a fresh snapshot; nothing is
    cached between calls.

    Usage::

        async with ZonarClient(ZonarConfig.from_env()) as client:
            asset = await client.get_asset("101")
    """

    def __init__(
        self,
        config: ZonarConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: FeedTransport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: FeedTransport | None = transport
        self._external_transport = transport is not None

    @property
    def config(self) -> ZonarConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ZonarClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpFeedTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> FeedTransport:
        if self._transport is None:
            raise ZonarError("Client not initialized. Use 'async with ZonarClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Feed access
    # ------------------------------------------------------------------

    async def fetch_snapshot_text(self) -> str:
        """Fetch the raw XML of the current-position report (one attempt)."""
        transport = self._require_transport()
        return await transport.fetch_current_positions()

    async def fetch_snapshot(self) -> FeedSnapshot:
        """Fetch and normalize a fresh snapshot."""
        text = await self.fetch_snapshot_text()
        return normalize_feed(text, policy=self._config.malformed_policy)

    async def get_asset(self, query: str, id_type: IdType = IdType.FLEET) -> Asset | None:
        """Return the first asset whose identifier equals *query*, or ``None``."""
        snapshot = await self.fetch_snapshot()
        asset = find_exact(snapshot, query, id_type)
        _logger.debug("Exact lookup %s=%r matched=%s", id_type, query, asset is not None)
        return asset

    async def search_assets(self, query: str, id_type: IdType = IdType.FLEET) -> list[Asset]:
        """Return every asset whose identifier contains *query*, ignoring case."""
        snapshot = await self.fetch_snapshot()
        matches = search_substring(snapshot, query, id_type)
        _logger.debug("Search %s~%r matched %d of %d assets", id_type, query, len(matches), len(snapshot))
        return matches
