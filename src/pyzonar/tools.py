"""Static descriptors of the tools exposed to the tool-calling protocol."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pyzonar.lookup import IdType
from pyzonar.models._base import ZonarBaseModel

GET_BUS_LOCATION = "get_bus_location"
SEARCH = "search"
FETCH = "fetch"


class ToolDescriptor(ZonarBaseModel):
    """Name, description and JSON schemas of one tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=dict)
    output_schema: dict[str, Any] = Field(default_factory=dict)


_ID_TYPE_SCHEMA: dict[str, Any] = {
    "type": "string",
    "enum": [member.value for member in IdType],
    "default": IdType.FLEET.value,
    "description": "Identifier the query is matched against",
}

_RESULT_ENTRY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string"},
        "text": {"type": "string"},
        "url": {"type": ["string", "null"]},
    },
    "required": ["id", "title", "text", "url"],
}

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=GET_BUS_LOCATION,
        description="Return latest GPS fix for a bus",
        input_schema={
            "type": "object",
            "properties": {
                "bus_id": {"type": "string", "description": "Fleet number / dbid / vin / tag"},
                "id_type": _ID_TYPE_SCHEMA,
            },
            "required": ["bus_id"],
        },
        output_schema={
            "type": "object",
            "properties": {
                "latitude": {"type": "number"},
                "longitude": {"type": "number"},
                "speed": {"type": "number"},
                "timestampUnix": {"type": "string"},
                "timestampReadable": {"type": "string"},
            },
            "required": ["latitude", "longitude", "speed", "timestampUnix", "timestampReadable"],
        },
    ),
    ToolDescriptor(
        name=SEARCH,
        description="Search buses whose identifier contains the query (case-insensitive)",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Substring of the identifier; empty matches all"},
                "id_type": _ID_TYPE_SCHEMA,
            },
            "required": ["query"],
        },
        output_schema={
            "type": "object",
            "properties": {"results": {"type": "array", "items": _RESULT_ENTRY_SCHEMA}},
            "required": ["results"],
        },
    ),
    ToolDescriptor(
        name=FETCH,
        description="Fetch the full record of one bus",
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "Identifier returned by search"},
                "id_type": _ID_TYPE_SCHEMA,
            },
            "required": ["id"],
        },
        output_schema={
            "type": "object",
            "properties": {
                **_RESULT_ENTRY_SCHEMA["properties"],
                "metadata": {
                    "type": "object",
                    "additionalProperties": {"type": ["string", "number"]},
                },
            },
            "required": ["id", "title", "text", "url", "metadata"],
        },
    ),
)

_TOOLS_BY_NAME: dict[str, ToolDescriptor] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolDescriptor | None:
    """Return the descriptor registered under *name*, if any."""
    return _TOOLS_BY_NAME.get(name)


def list_tools() -> list[dict[str, Any]]:
    """JSON-ready descriptors for the tool-listing endpoint."""
    return [tool.model_dump() for tool in TOOLS]
