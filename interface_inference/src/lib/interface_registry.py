#!/usr/bin/env python3
"""
Per-run store of named interface definitions.

register() either reuses an identical definition, merges into a similar one
(same base name and field names, different types) or allocates a new name.
"""

import logging
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from interface_naming import NameAllocator
from interface_signatures import base_name, field_names, signature
from interface_types import (
    NULL,
    UNDEFINED,
    FieldDefinition,
    InterfaceDefinition,
    members,
    rename_refs,
    union_of,
)

logger = logging.getLogger(__name__)

ShapeKey = Tuple[str, FrozenSet[str]]


class InterfaceRegistry:
    """Named definitions for one inference run, indexed for reuse."""

    def __init__(self, allocator: Optional[NameAllocator] = None):
        self.allocator = allocator or NameAllocator()
        self.definitions: Dict[str, InterfaceDefinition] = {}
        self._by_signature: Dict[str, str] = {}
        self._signatures: Dict[str, str] = {}
        self._by_shape: Dict[ShapeKey, str] = {}

    def __len__(self) -> int:
        return len(self.definitions)

    def __iter__(self) -> Iterator[InterfaceDefinition]:
        return iter(self.definitions.values())

    def __contains__(self, name: str) -> bool:
        return name in self.definitions

    def get(self, name: str) -> Optional[InterfaceDefinition]:
        return self.definitions.get(name)

    def signature_of(self, name: str) -> str:
        return self._signatures[name]

    def register(self, fields: Sequence[FieldDefinition], candidate: str, claim: bool = False) -> str:
        """
        Register a freshly computed shape and return the name to reference it by.

        Args:
            fields: Field definitions in first-seen order
            candidate: Cleaned name the shape would like to have
            claim: Allow taking candidate even if the allocator reserved it

        Returns:
            The name of an identical, merged or newly created definition
        """
        sig = signature(fields)
        existing = self._by_signature.get(sig)
        if existing is not None:
            logger.debug("Reusing %s for %s", existing, candidate)
            return existing

        similar = self._by_shape.get((base_name(candidate), field_names(fields)))
        if similar is not None:
            self._merge_into(self.definitions[similar], fields)
            logger.debug("Merged %s shape into %s", candidate, similar)
            return similar

        name = self.allocator.unique(candidate, claim=claim)
        definition = InterfaceDefinition(
            name=name,
            fields=[FieldDefinition(f.name, f.type, f.optional) for f in fields],
        )
        self.definitions[name] = definition
        self._index(definition)
        logger.debug("Created %s with %d fields", name, len(fields))
        return name

    def _index(self, definition: InterfaceDefinition) -> None:
        sig = signature(definition.fields)
        holder = self._by_signature.setdefault(sig, definition.name)
        if holder != definition.name:
            logger.debug("%s now matches %s and will be collapsed", definition.name, holder)
        self._signatures[definition.name] = sig
        self._by_shape[(base_name(definition.name), field_names(definition.fields))] = definition.name

    def _merge_into(self, definition: InterfaceDefinition, fields: Sequence[FieldDefinition]) -> None:
        incoming = {f.name: f for f in fields}
        for current in definition.fields:
            new = incoming[current.name]
            current.type = union_of(members(current.type) + members(new.type), sort=True)

            merged = members(current.type)
            has_real = any(t not in (NULL, UNDEFINED) for t in merged)
            if NULL in merged and has_real:
                current.optional = False
            else:
                current.optional = current.optional and new.optional

        old_sig = self._signatures[definition.name]
        if self._by_signature.get(old_sig) == definition.name:
            del self._by_signature[old_sig]
        self._index(definition)

    def finalize(self) -> Dict[str, str]:
        """
        Collapse definitions that merging has made identical to older ones.

        References to a collapsed definition are rewritten to the surviving
        one, which may in turn make referencing definitions identical, so this
        repeats until every signature is unique.

        Returns:
            Mapping of removed names to the names that replace them
        """
        renames: Dict[str, str] = {}
        while True:
            holders: Dict[str, str] = {}
            collapsed: Dict[str, str] = {}
            for definition in self.definitions.values():
                holder = holders.setdefault(signature(definition.fields), definition.name)
                if holder != definition.name:
                    collapsed[definition.name] = holder
            if not collapsed:
                break

            for name, holder in collapsed.items():
                logger.debug("Collapsing %s into %s", name, holder)
                del self.definitions[name]
            renames = {old: collapsed.get(new, new) for old, new in renames.items()}
            renames.update(collapsed)
            for definition in self.definitions.values():
                for f in definition.fields:
                    f.type = rename_refs(f.type, collapsed)

        if renames:
            self._by_signature = {}
            self._signatures = {}
            self._by_shape = {}
            for definition in self.definitions.values():
                self._index(definition)
        return renames

    def ordered(self) -> List[InterfaceDefinition]:
        """Definitions in creation order."""
        return list(self.definitions.values())
