#!/usr/bin/env python3
"""
Type expressions and definitions for interface inference.

A TypeExpression is one of Primitive, ArrayOf, UnionOf or NamedRef. Rendering
is a pure function of the tree; equality is dataclass equality.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple, Union


@dataclass(frozen=True)
class Primitive:
    name: str


@dataclass(frozen=True)
class ArrayOf:
    element: "TypeExpression"


@dataclass(frozen=True)
class UnionOf:
    members: Tuple["TypeExpression", ...]


@dataclass(frozen=True)
class NamedRef:
    name: str


TypeExpression = Union[Primitive, ArrayOf, UnionOf, NamedRef]

BOOLEAN = Primitive("boolean")
NUMBER = Primitive("number")
STRING = Primitive("string")
NULL = Primitive("null")
UNDEFINED = Primitive("undefined")
UNKNOWN = Primitive("unknown")
UNKNOWN_ARRAY = ArrayOf(UNKNOWN)

_TRAILING = (NULL, UNDEFINED)


@dataclass
class FieldDefinition:
    name: str
    type: TypeExpression
    optional: bool = False


@dataclass
class InterfaceDefinition:
    name: str
    fields: List[FieldDefinition] = field(default_factory=list)

    def field_named(self, name: str) -> FieldDefinition:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


def members(expr: TypeExpression) -> Tuple[TypeExpression, ...]:
    """Flatten an expression into its union members."""
    if isinstance(expr, UnionOf):
        flat: List[TypeExpression] = []
        for member in expr.members:
            flat.extend(members(member))
        return tuple(flat)
    return (expr,)


def is_array(expr: TypeExpression) -> bool:
    return isinstance(expr, ArrayOf)


def union_of(types: Iterable[TypeExpression], sort: bool = False) -> TypeExpression:
    """
    Build a normalized union from a collection of type expressions.

    Nested unions are flattened and duplicates removed, keeping first-seen
    order (or case-insensitive rendered-text order when sort is set, so
    `string | User`). A bare unknown or unknown[] member is dropped when a
    more specific alternative exists, and null/undefined always come last.

    Returns:
        UNKNOWN for an empty collection, the member itself for a single
        member, otherwise a UnionOf.
    """
    seen: List[TypeExpression] = []
    for expr in types:
        for member in members(expr):
            if member not in seen:
                seen.append(member)

    arrays = [m for m in seen if is_array(m)]
    if len(arrays) > 1 and UNKNOWN_ARRAY in seen:
        seen.remove(UNKNOWN_ARRAY)
    if len(seen) > 1 and UNKNOWN in seen:
        seen.remove(UNKNOWN)

    if sort:
        seen.sort(key=_alphabetical)
    head = [m for m in seen if m not in _TRAILING]
    tail = [m for m in _TRAILING if m in seen]
    ordered = head + tail

    if not ordered:
        return UNKNOWN
    if len(ordered) == 1:
        return ordered[0]
    return UnionOf(tuple(ordered))


def rename_refs(expr: TypeExpression, renames: Dict[str, str]) -> TypeExpression:
    """Point NamedRefs at their new names, deduplicating unions on the way."""
    if isinstance(expr, NamedRef):
        return NamedRef(renames.get(expr.name, expr.name))
    if isinstance(expr, ArrayOf):
        return ArrayOf(rename_refs(expr.element, renames))
    if isinstance(expr, UnionOf):
        return union_of(rename_refs(m, renames) for m in expr.members)
    return expr


def render_type(expr: TypeExpression) -> str:
    """Render a type expression as TypeScript source text."""
    if isinstance(expr, (Primitive, NamedRef)):
        return expr.name
    if isinstance(expr, ArrayOf):
        inner = render_type(expr.element)
        if isinstance(expr.element, UnionOf):
            return f"({inner})[]"
        return f"{inner}[]"
    if isinstance(expr, UnionOf):
        return " | ".join(render_type(m) for m in expr.members)
    return UNKNOWN.name


def type_key(expr: TypeExpression) -> str:
    """Canonical text for an expression, independent of union member order."""
    if isinstance(expr, (Primitive, NamedRef)):
        return expr.name
    if isinstance(expr, ArrayOf):
        return f"{type_key(expr.element)}[]"
    if isinstance(expr, UnionOf):
        return "(" + "|".join(sorted(type_key(m) for m in expr.members)) + ")"
    return UNKNOWN.name


def _alphabetical(expr: TypeExpression) -> Tuple[str, str]:
    text = render_type(expr)
    return text.lower(), text
