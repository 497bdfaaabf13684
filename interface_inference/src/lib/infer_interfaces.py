#!/usr/bin/env python3
"""
TypeScript Interface Inference Library

Infers named TypeScript interfaces from a parsed JSON value. Identical object
shapes collapse into one interface, array elements are merged into unions with
optional fields, and every run starts from an empty registry.
"""

import json
import logging
import re
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from interface_naming import NameAllocator
from interface_registry import InterfaceRegistry
from interface_signatures import shape_signature
from interface_types import (
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    UNKNOWN,
    ArrayOf,
    FieldDefinition,
    InterfaceDefinition,
    NamedRef,
    TypeExpression,
    rename_refs,
    render_type,
    union_of,
)
from shape_merger import merge_shapes, merged_fields

logger = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = "RootInterface"

_IDENTIFIER = re.compile(r"[a-zA-Z_$][a-zA-Z0-9_$]*")

# Upper bound on interpreter frames spent per level of JSON nesting.
_FRAMES_PER_LEVEL = 8
_SHALLOW_DEPTH = 64


@dataclass(frozen=True)
class RenderOptions:
    indent: int = 2
    export: bool = True


@dataclass
class InferenceContext:
    """Mutable state threaded through one inference run."""

    registry: InterfaceRegistry = field(default_factory=InterfaceRegistry)

    @property
    def allocator(self) -> NameAllocator:
        return self.registry.allocator


@dataclass
class InferenceResult:
    root_name: str
    root_type: TypeExpression
    definitions: List[InterfaceDefinition]

    @property
    def by_name(self) -> Dict[str, InterfaceDefinition]:
        return {d.name: d for d in self.definitions}

    @property
    def needs_alias(self) -> bool:
        """True when the root type must be exposed as `type root_name = ...`."""
        if self.root_name in self.by_name:
            return False
        return self.root_type != NamedRef(self.root_name)


def infer_interfaces(
    value: Any,
    root_name: str = DEFAULT_ROOT_NAME,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Main entry point: Infer TypeScript interfaces from a JSON value.

    Args:
        value: Parsed JSON (None, bool, int, float, str, list or dict)
        root_name: Name for the root interface or root type alias
        options: Rendering options, defaults to RenderOptions()

    Returns:
        The interface listing, definitions first and the root alias last
    """
    with recursion_headroom(value):
        result = infer_definitions(value, root_name)
        return render_result(result, options or RenderOptions())


def infer_definitions(value: Any, root_name: str = DEFAULT_ROOT_NAME) -> InferenceResult:
    """
    Run inference on a fresh context and return the structured result.

    root_name is reserved up front: nested shapes that would clean to the
    same name take a counter suffix instead, so a root object always gets
    root_name itself and a root alias never shadows an interface.
    """
    context = InferenceContext()
    context.allocator.reserve(root_name)

    with recursion_headroom(value):
        if isinstance(value, dict):
            root_type: TypeExpression = _infer_object(value, context, root_name, claim=True)
        else:
            root_type = infer_type(value, context, root_name)

        renames = context.registry.finalize()
        if renames:
            root_type = rename_refs(root_type, renames)

    logger.debug("Inferred %d interfaces for %s", len(context.registry), root_name)
    return InferenceResult(
        root_name=root_name,
        root_type=root_type,
        definitions=context.registry.ordered(),
    )


def nesting_depth(value: Any) -> int:
    """Deepest level of list/dict nesting in value; scalars are depth 0."""
    deepest = 0
    stack = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        deepest = max(deepest, depth + 1)
        stack.extend((child, depth + 1) for child in children)
    return deepest


@contextmanager
def recursion_headroom(value: Any) -> Iterator[None]:
    """
    Raise the interpreter recursion limit for the duration of one run.

    Inference walks the value recursively, a handful of frames per level, so
    anything json.loads accepts must fit. The previous limit is restored on exit.
    """
    depth = nesting_depth(value)
    if depth <= _SHALLOW_DEPTH:
        yield
        return

    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(previous + depth * _FRAMES_PER_LEVEL)
    logger.debug("Recursion limit raised from %d for depth %d", previous, depth)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def infer_type(value: Any, context: InferenceContext, hint: str = "") -> TypeExpression:
    """
    Classify a single JSON value, registering interfaces for any objects in it.

    Args:
        value: A JSON value
        context: The run's inference context
        hint: Property name (or root name) used to name nested interfaces
    """
    primitive = primitive_type(value)
    if primitive is not None:
        return primitive
    if isinstance(value, list):
        return _infer_array(value, context, hint)
    if isinstance(value, dict):
        return _infer_object(value, context, context.allocator.clean(hint, generic=True))
    return UNKNOWN


def primitive_type(value: Any) -> Optional[TypeExpression]:
    """Return the primitive type of value, or None for arrays, objects and unknowns."""
    if value is None:
        return NULL
    elif isinstance(value, bool):
        return BOOLEAN
    elif isinstance(value, (int, float)):
        return NUMBER
    elif isinstance(value, str):
        return STRING
    return None


def _infer_object(
    obj: Dict[str, Any], context: InferenceContext, candidate: str, claim: bool = False
) -> NamedRef:
    fields = _object_fields(obj, context)
    return NamedRef(context.registry.register(fields, candidate, claim=claim))


def _object_fields(obj: Dict[str, Any], context: InferenceContext) -> List[FieldDefinition]:
    return [
        FieldDefinition(name=key, type=infer_type(value, context, key))
        for key, value in obj.items()
    ]


def _infer_array(arr: List[Any], context: InferenceContext, hint: str) -> ArrayOf:
    """Infer the element type of an array; all object elements share one interface."""
    labels: List[TypeExpression] = []
    shapes: List[Dict[str, Any]] = []

    for item in arr:
        if isinstance(item, dict):
            shapes.append(item)
        else:
            label = infer_type(item, context, hint)
            if label not in labels:
                labels.append(label)

    if shapes:
        candidate = context.allocator.clean(hint, generic=False)
        if len({shape_signature(shape) for shape in shapes}) == 1:
            fields = _object_fields(shapes[0], context)
        else:
            merged = merge_shapes(shapes, lambda v, key: infer_type(v, context, key))
            fields = merged_fields(merged)
        labels.append(NamedRef(context.registry.register(fields, candidate)))

    return ArrayOf(union_of(labels))


def format_property_name(name: str) -> str:
    """Quote a property name unless it is a bare identifier."""
    if _IDENTIFIER.fullmatch(name):
        return name
    return json.dumps(name, ensure_ascii=False)


def render_interface(definition: InterfaceDefinition, options: RenderOptions) -> str:
    prefix = "export " if options.export else ""
    if not definition.fields:
        return f"{prefix}interface {definition.name} {{}}"

    pad = " " * options.indent
    lines = [f"{prefix}interface {definition.name} {{"]
    for f in definition.fields:
        marker = "?" if f.optional else ""
        lines.append(f"{pad}{format_property_name(f.name)}{marker}: {render_type(f.type)};")
    lines.append("}")
    return "\n".join(lines)


def render_result(result: InferenceResult, options: RenderOptions) -> str:
    """Render definitions newest first, then the root alias when one is needed."""
    blocks = [render_interface(d, options) for d in reversed(result.definitions)]
    if result.needs_alias:
        prefix = "export " if options.export else ""
        blocks.append(f"{prefix}type {result.root_name} = {render_type(result.root_type)};")
    return "\n\n".join(blocks)
