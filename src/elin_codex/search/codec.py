"""
Compact URL token for search state.

The tree is shortened to ``{"l": logic, "c": [...]}`` with groups as
``{"t": "g", "l": ..., "c": [...]}`` and conditions as
``{"f": field, "o": operator, "v": value}``, serialized as JSON without
whitespace, percent-encoded like ``encodeURIComponent`` and base64-encoded.
Tokens produced by the web frontend decode here and vice versa.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any
from urllib.parse import quote, unquote

from pydantic import ValidationError

from .models import ConditionGroup, ConditionNode, SearchCondition, SearchState

logger = logging.getLogger("elin-codex")

# Characters encodeURIComponent leaves alone besides letters and digits.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _compact_value(value: Any) -> Any:
    if isinstance(value, (tuple, list)):
        return [_compact_value(v) for v in value]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _compact_node(node: ConditionNode) -> dict[str, Any]:
    if isinstance(node, ConditionGroup):
        return {
            "t": "g",
            "l": node.logic.value,
            "c": [_compact_node(child) for child in node.conditions],
        }
    return {
        "f": node.field,
        "o": node.operator.value,
        "v": _compact_value(node.value),
    }


def serialize_search(state: SearchState) -> str:
    """Encode a search as a URL-safe token; an empty search encodes to ``""``."""
    if not state.conditions:
        return ""

    compact = {
        "l": state.logic.value,
        "c": [_compact_node(node) for node in state.conditions],
    }
    text = json.dumps(compact, separators=(",", ":"), ensure_ascii=False)
    escaped = quote(text, safe=_URI_COMPONENT_SAFE)
    return base64.b64encode(escaped.encode("ascii")).decode("ascii")


def _children(data: Any) -> list[Any]:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    children = data["c"]
    if not isinstance(children, list):
        raise ValueError(f"expected a list of conditions, got {type(children).__name__}")
    return children


def _expand_node(data: Any) -> ConditionNode:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if data.get("t") == "g":
        return ConditionGroup(
            logic=data["l"],
            conditions=[_expand_node(child) for child in _children(data)],
        )
    return SearchCondition(field=data["f"], operator=data["o"], value=data["v"])


def deserialize_search(token: str | None) -> SearchState | None:
    """Decode a token back into an enabled SearchState with fresh node ids.

    Returns None for empty or malformed tokens; callers treat that as no filter.
    """
    if not token:
        return None

    try:
        escaped = base64.b64decode(token, validate=True).decode("ascii")
        compact = json.loads(unquote(escaped, errors="strict"))
        root = ConditionGroup(
            logic=compact["l"],
            conditions=[_expand_node(child) for child in _children(compact)],
        )
    except (
        binascii.Error,
        UnicodeDecodeError,
        ValueError,
        KeyError,
        TypeError,
        AttributeError,
        RecursionError,
        ValidationError,
    ) as e:
        logger.debug(f"Ignoring malformed search token: {e}")
        return None

    return SearchState(enabled=True, root=root)
