"""Normalization helpers.

Centralizes defensive parsing of the XML-derived mappings produced by
``xmltodict``: attributes arrive as ``@name`` keys, element text that
sits next to attributes arrives as ``#text``, and a repeated element
may arrive either as a single mapping or as a list.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

ATTR_PREFIX = "@"
TEXT_KEY = "#text"


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def as_list(value: Any) -> list[Any]:
    """Return *value* as a list regardless of how many elements it held.

    ``None`` becomes ``[]``, a single mapping becomes a one-element list
    and lists are copied unchanged.  Callers past this point never
    branch on cardinality again.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def text_of(node: Any) -> str | None:
    """Text content of an element that may also carry attributes."""
    if isinstance(node, Mapping):
        return safe_str(node.get(TEXT_KEY))
    if isinstance(node, list):
        # Repeated element: the first occurrence is authoritative.
        return text_of(node[0]) if node else None
    return safe_str(node)


def attribute_of(node: Any, name: str) -> str | None:
    if isinstance(node, Mapping):
        return safe_str(node.get(f"{ATTR_PREFIX}{name}"))
    return None


def flatten_element(node: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten one element into ``{name: text}``.

    Attributes lose their ``@`` prefix. Child elements collapse to their
    text content; a child's own attributes are kept as
    ``<child>_<attribute>`` (``<speed unit="Mile/Hour">`` yields
    ``speed_unit``). Attributes win over same-named children.
    """
    flat: dict[str, Any] = {}
    attributes: dict[str, Any] = {}
    for key, value in node.items():
        if key == TEXT_KEY:
            continue
        if key.startswith(ATTR_PREFIX):
            attributes[key[len(ATTR_PREFIX) :]] = safe_str(value)
            continue
        flat[key] = text_of(value)
        child = value[0] if isinstance(value, list) and value else value
        if isinstance(child, Mapping):
            for child_key, child_value in child.items():
                if child_key.startswith(ATTR_PREFIX):
                    flat[f"{key}_{child_key[len(ATTR_PREFIX):]}"] = safe_str(child_value)
    flat.update({k: v for k, v in attributes.items() if v is not None})
    return flat
