"""Tool-call boundary: JSON object in, status code and JSON object out.

The HTTP (or stdio) server that owns the wire is not part of this
package; it hands each decoded request to :meth:`ToolDispatcher.call_tool`
and writes back :attr:`ToolResult.status` and :attr:`ToolResult.body`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import tzinfo
from http import HTTPStatus
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ValidationError

from pyzonar.client import ZonarClient
from pyzonar.exceptions import (
    ZonarConfigError,
    ZonarEmptyFeedError,
    ZonarInvalidArgumentsError,
    ZonarNotFoundError,
    ZonarParseError,
    ZonarTransportError,
    ZonarUnknownToolError,
    ZonarUpstreamError,
)
from pyzonar.lookup import find_exact, search_substring
from pyzonar.models.requests import BusLocationArguments, FetchArguments, SearchArguments, ToolCallRequest
from pyzonar.responses import to_fetch_document, to_location, to_search_results
from pyzonar.tools import FETCH, GET_BUS_LOCATION, SEARCH, get_tool, list_tools

_logger = logging.getLogger(__name__)

BUS_NOT_FOUND = "Bus not found"


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Status code plus JSON body of one tool call."""

    status: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status < HTTPStatus.BAD_REQUEST


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def error_result(exc: Exception, context: Mapping[str, Any] | None = None) -> ToolResult:
    """Convert an exception raised while serving a call into an error body."""
    echo = dict(context or {})
    if isinstance(exc, ZonarNotFoundError):
        return ToolResult(HTTPStatus.NOT_FOUND, {"error": BUS_NOT_FOUND, **echo})
    if isinstance(exc, ZonarEmptyFeedError):
        return ToolResult(
            HTTPStatus.NOT_FOUND,
            {"error": "No assets found in Zonar response", "message": str(exc), **echo},
        )
    if isinstance(exc, ZonarUpstreamError):
        body: dict[str, Any] = {"error": "Failed to fetch data from Zonar", "message": str(exc)}
        if exc.code:
            body["code"] = exc.code
        return ToolResult(HTTPStatus.BAD_GATEWAY, body)
    if isinstance(exc, ZonarUnknownToolError):
        return ToolResult(HTTPStatus.BAD_REQUEST, {"error": "Unknown tool", "name": exc.name})
    if isinstance(exc, ZonarInvalidArgumentsError):
        return ToolResult(HTTPStatus.BAD_REQUEST, {"error": "Invalid arguments", "message": str(exc), **echo})
    if isinstance(exc, ZonarTransportError):
        body = {"error": "Failed to reach Zonar", "message": str(exc)}
        if exc.status_code is not None:
            body["status_code"] = exc.status_code
        return ToolResult(HTTPStatus.INTERNAL_SERVER_ERROR, body)
    if isinstance(exc, ZonarParseError):
        return ToolResult(HTTPStatus.INTERNAL_SERVER_ERROR, {"error": "Invalid Zonar response", "message": str(exc)})
    return ToolResult(HTTPStatus.INTERNAL_SERVER_ERROR, {"error": "Internal Server Error", "message": str(exc)})


def _resolve_time_zone(name: str | None) -> tzinfo | None:
    if name is None:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ZonarConfigError(f"Unknown time zone: {name!r}") from exc


class ToolDispatcher:
    """Serve ``list tools`` and ``call tool`` requests against a :class:`ZonarClient`.

    Each call fetches its own snapshot; the dispatcher keeps no state
    between calls, so concurrent calls need no coordination.
    """

    def __init__(self, client: ZonarClient) -> None:
        self._client = client
        self._tz = _resolve_time_zone(client.config.time_zone)
        self._handlers: dict[str, tuple[type[BaseModel], Callable[[Any], Awaitable[dict[str, Any]]]]] = {
            GET_BUS_LOCATION: (BusLocationArguments, self._get_bus_location),
            SEARCH: (SearchArguments, self._search),
            FETCH: (FetchArguments, self._fetch),
        }

    def list_tools(self) -> dict[str, Any]:
        return {"tools": list_tools()}

    async def call_tool(self, request: Mapping[str, Any]) -> ToolResult:
        """Run one tool call and return its status and JSON body.

        Every failure is converted to an error body; this method does not
        raise for request, feed or lookup errors.
        """
        context: dict[str, Any] = {}
        try:
            try:
                call = ToolCallRequest.model_validate(request)
            except ValidationError as exc:
                raise ZonarInvalidArgumentsError(_validation_message(exc)) from exc

            if get_tool(call.name) is None:
                if self._client.config.strict_tools:
                    raise ZonarUnknownToolError(call.name)
                _logger.debug("Ignoring call to unregistered tool %r", call.name)
                return ToolResult(HTTPStatus.OK, {"ok": True})

            args_model, handler = self._handlers[call.name]
            context = {key: call.arguments[key] for key in _ECHO_KEYS.get(call.name, ()) if key in call.arguments}
            try:
                arguments = args_model.model_validate(call.arguments)
            except ValidationError as exc:
                raise ZonarInvalidArgumentsError(_validation_message(exc)) from exc

            _logger.debug("Calling tool %s with %s", call.name, arguments)
            return ToolResult(HTTPStatus.OK, await handler(arguments))
        except (ZonarNotFoundError, ZonarEmptyFeedError, ZonarInvalidArgumentsError, ZonarUnknownToolError) as exc:
            _logger.info("Tool call rejected: %s", exc)
            return error_result(exc, context)
        except (ZonarUpstreamError, ZonarTransportError, ZonarParseError) as exc:
            _logger.error("Zonar request failed: %s", exc)
            return error_result(exc, context)
        except Exception as exc:  # noqa: BLE001
            _logger.exception("Unexpected error while processing tool call")
            return error_result(exc, context)

    # ------------------------------------------------------------------
    # Tool handlers
    # ------------------------------------------------------------------

    async def _get_bus_location(self, arguments: BusLocationArguments) -> dict[str, Any]:
        snapshot = await self._client.fetch_snapshot()
        asset = find_exact(snapshot, arguments.bus_id, arguments.id_type)
        if asset is None:
            raise ZonarNotFoundError(BUS_NOT_FOUND, query=arguments.bus_id, id_type=arguments.id_type)
        return to_location(asset, tz=self._tz)

    async def _search(self, arguments: SearchArguments) -> dict[str, Any]:
        snapshot = await self._client.fetch_snapshot()
        return to_search_results(search_substring(snapshot, arguments.query, arguments.id_type), tz=self._tz)

    async def _fetch(self, arguments: FetchArguments) -> dict[str, Any]:
        snapshot = await self._client.fetch_snapshot()
        asset = find_exact(snapshot, arguments.id, arguments.id_type)
        if asset is None:
            raise ZonarNotFoundError(BUS_NOT_FOUND, query=arguments.id, id_type=arguments.id_type)
        return to_fetch_document(asset, tz=self._tz)


# Arguments echoed back in 4xx bodies for diagnosability.
_ECHO_KEYS: dict[str, tuple[str, ...]] = {
    GET_BUS_LOCATION: ("bus_id",),
    SEARCH: ("query",),
    FETCH: ("id",),
}
