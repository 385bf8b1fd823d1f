from __future__ import annotations

from enum import Enum
from typing import Any


class NodeKind(Enum):
    # # Closed set of shapes a decoded payload node can take
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    UNSUPPORTED = "unsupported"


def node_kind(value: Any) -> NodeKind:
    # # Classify a decoded value; bool is checked before number since bool subclasses int
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOL
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, dict):
        return NodeKind.OBJECT
    if isinstance(value, list):
        return NodeKind.ARRAY
    return NodeKind.UNSUPPORTED
