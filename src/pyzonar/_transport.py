"""HTTP transport for the Zonar ``interface.php`` API."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from pyzonar._constants import INTERFACE_PATH, SHOWPOSITION_PARAMS, USER_AGENT
from pyzonar._redact import redact_for_log
from pyzonar.config import ZonarConfig
from pyzonar.exceptions import ZonarTransportError

_logger = logging.getLogger(__name__)


class FeedTransport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpFeedTransport`) concrete.
    """

    async def fetch_current_positions(self) -> str:
        ...


class HttpFeedTransport:
    """Single-attempt GET of the current-position report."""

    def __init__(self, config: ZonarConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _build_params(self) -> dict[str, str]:
        return {
            **SHOWPOSITION_PARAMS,
            "logvers": self._config.logvers,
            "customer": self._config.customer,
            "username": self._config.username,
            "password": self._config.password,
        }

    async def fetch_current_positions(self) -> str:
        """Fetch the raw XML text of the current-position report.

        Raises
        ------
        ZonarTransportError
            On network failure, timeout, or a non-2xx response.
        """
        url = f"{self._config.base_url}{INTERFACE_PATH}"
        params = self._build_params()
        headers = {"user-agent": USER_AGENT, "accept": "application/xml, text/xml"}
        extra: dict[str, aiohttp.ClientTimeout] = {}
        if self._config.request_timeout is not None:
            extra["timeout"] = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("GET %s params=%s", url, redact_for_log(params))

        try:
            async with self._http.get(url, params=params, headers=headers, **extra) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise ZonarTransportError(
                        f"HTTP {resp.status} from {INTERFACE_PATH}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=INTERFACE_PATH,
                    )
        except ZonarTransportError:
            raise
        except TimeoutError as exc:
            raise ZonarTransportError(
                f"Request to {INTERFACE_PATH} timed out",
                endpoint=INTERFACE_PATH,
            ) from exc
        except aiohttp.ClientError as exc:
            raise ZonarTransportError(
                f"Request to {INTERFACE_PATH} failed: {exc}",
                endpoint=INTERFACE_PATH,
            ) from exc

        _logger.debug("Received %d characters from %s", len(text), INTERFACE_PATH)
        return text
