#!/usr/bin/env python3
"""
Merge sampled object shapes into per-field type sets.

Fields absent from some samples carry the MISSING marker, which is what makes
them optional once turned into FieldDefinitions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from interface_types import (
    NULL,
    UNDEFINED,
    UNKNOWN_ARRAY,
    FieldDefinition,
    Primitive,
    TypeExpression,
    is_array,
    union_of,
)

MISSING = Primitive("missing")

InferValue = Callable[[Any, str], TypeExpression]


@dataclass
class MergedShape:
    """
    The union of an array's object samples.

    representative holds, per key, the first sample value that is not null or
    an empty array; its key order is the field order of the merged interface.
    type_sets holds every type observed for a key, plus MISSING when some
    sample lacked it.
    """

    representative: Dict[str, Any] = field(default_factory=dict)
    type_sets: Dict[str, List[TypeExpression]] = field(default_factory=dict)


def _is_placeholder(value: Any) -> bool:
    return value is None or (isinstance(value, list) and not value)


def merge_shapes(shapes: Sequence[Dict[str, Any]], infer_value: InferValue) -> MergedShape:
    """
    Merge object samples into one shape.

    Args:
        shapes: Object values sampled from one array
        infer_value: Computes the type of a value given its key as name hint

    Returns:
        A MergedShape whose representative and type_sets share the first-seen
        key order
    """
    merged = MergedShape()
    occurrences: Dict[str, int] = {}

    for shape in shapes:
        for key, value in shape.items():
            types = merged.type_sets.setdefault(key, [])
            occurrences[key] = occurrences.get(key, 0) + 1

            value_type = infer_value(value, key)
            if value_type not in types:
                types.append(value_type)

            if key not in merged.representative or (
                _is_placeholder(merged.representative[key]) and not _is_placeholder(value)
            ):
                merged.representative[key] = value

    for key, types in merged.type_sets.items():
        if occurrences[key] < len(shapes):
            types.append(MISSING)

        arrays = [t for t in types if is_array(t)]
        if len(arrays) > 1 and UNKNOWN_ARRAY in types:
            types.remove(UNKNOWN_ARRAY)

    return merged


def derive_field(name: str, types: Sequence[TypeExpression]) -> FieldDefinition:
    """Turn a field's observed type set into a FieldDefinition."""
    optional = MISSING in types or UNDEFINED in types
    present = [t for t in types if t != MISSING]
    field_type = union_of(present)

    real = [t for t in present if t not in (NULL, UNDEFINED)]
    if NULL in present and real:
        optional = False

    return FieldDefinition(name=name, type=field_type, optional=optional)


def merged_fields(merged: MergedShape) -> List[FieldDefinition]:
    """Field definitions in the representative's key order."""
    return [derive_field(name, merged.type_sets[name]) for name in merged.representative]
