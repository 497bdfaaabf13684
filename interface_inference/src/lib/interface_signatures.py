#!/usr/bin/env python3
"""
Structural signatures used for duplicate and similar-shape detection.

Signatures are canonical strings: fields sorted by name and joined as
"name:type" pairs, so encounter order never matters.
"""

import json
import re
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from interface_types import FieldDefinition, type_key

_TRAILING_DIGITS = re.compile(r"\d+$")


def _pair(name: str, type_text: str) -> str:
    return f"{json.dumps(name)}:{type_text}"


def signature(fields: Iterable[FieldDefinition]) -> str:
    """Order-independent key for a list of field definitions."""
    pairs = sorted((f.name, type_key(f.type)) for f in fields)
    return ";".join(_pair(name, text) for name, text in pairs)


def field_names(fields: Iterable[FieldDefinition]) -> FrozenSet[str]:
    """The field-name set of a shape, with types stripped."""
    return frozenset(f.name for f in fields)


def base_name(name: str) -> str:
    """Strip a trailing uniqueness counter from a name."""
    return _TRAILING_DIGITS.sub("", name)


def _leaf_sketch(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "unknown"


def sketch(value: Any) -> str:
    """
    Describe the structure of a raw JSON value without naming anything.

    Objects sketch to their sorted key/sketch pairs and arrays to the sorted
    set of their element sketches. Key order and element order are ignored.
    The walk keeps its own stack, so nesting depth is not bounded by the
    interpreter's recursion limit.
    """
    done: List[str] = []
    stack: List[Tuple[Any, bool]] = [(value, False)]
    while stack:
        node, expanded = stack.pop()
        if not isinstance(node, (list, dict)):
            done.append(_leaf_sketch(node))
            continue

        children = list(node.values()) if isinstance(node, dict) else node
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))
            continue

        start = len(done) - len(children)
        parts = done[start:]
        del done[start:]
        if isinstance(node, dict):
            pairs = sorted(zip(node.keys(), parts))
            done.append("{" + ";".join(_pair(key, text) for key, text in pairs) + "}")
        else:
            done.append("[" + "|".join(sorted(set(parts))) + "]")
    return done[0]


def shape_signature(obj: Dict[str, Any]) -> str:
    """Signature of a raw object value, computed from sketches."""
    return sketch(obj)[1:-1]
