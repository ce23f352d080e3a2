"""Pydantic models for tool call requests and arguments.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pyzonar.dispatcher.ToolDispatcher`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyzonar.lookup import IdType


def _coerce_identifier(value: Any) -> Any:
    # Tool clients sometimes send fleet numbers as JSON numbers.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ToolCallRequest(BaseModel):
    """Envelope of a ``call tool`` request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class _ToolArguments(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_default=True,
    )

    id_type: IdType = IdType.FLEET


class BusLocationArguments(_ToolArguments):
    """Arguments of ``get_bus_location``."""

    bus_id: str

    @field_validator("bus_id", mode="before")
    @classmethod
    def _coerce_bus_id(cls, value: Any) -> Any:
        return _coerce_identifier(value)

    @field_validator("bus_id")
    @classmethod
    def _bus_id_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("bus_id must be non-empty")
        return value


class SearchArguments(_ToolArguments):
    """Arguments of ``search``. An empty query matches every asset."""

    query: str

    @field_validator("query", mode="before")
    @classmethod
    def _coerce_query(cls, value: Any) -> Any:
        return "" if value is None else _coerce_identifier(value)


class FetchArguments(_ToolArguments):
    """Arguments of ``fetch``."""

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _coerce_identifier(value)

    @field_validator("id")
    @classmethod
    def _id_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("id must be non-empty")
        return value
