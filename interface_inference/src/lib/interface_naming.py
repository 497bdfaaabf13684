#!/usr/bin/env python3
"""
Interface naming: hint cleaning, singularization and per-run uniqueness.
"""

import re
from typing import Dict, Set

GENERIC_FALLBACK = "Interface"
ITEM_FALLBACK = "Item"

COMMON_NAMES: Dict[str, str] = {
    "address": "Address",
    "location": "Location",
    "user": "User",
    "users": "User",
    "author": "Author",
    "authors": "Author",
    "owner": "Owner",
    "owners": "Owner",
    "settings": "Settings",
    "config": "Config",
    "configuration": "Configuration",
    "metadata": "Metadata",
    "meta": "Meta",
    "item": "Item",
    "items": "Item",
    "product": "Product",
    "products": "Product",
    "order": "Order",
    "orders": "Order",
    "payment": "Payment",
    "payments": "Payment",
    "customer": "Customer",
    "customers": "Customer",
    "contact": "Contact",
    "contacts": "Contact",
    "contactinfo": "ContactInfo",
    "apiendpoint": "ApiEndpoint",
    "apiendpoints": "ApiEndpoint",
}

_AFFIXES = (
    re.compile(r"^Root"),
    re.compile(r"Interface$"),
    re.compile(r"Item$"),
    re.compile(r"Type$"),
)


def singularize(word: str) -> str:
    """Drop a trailing plural ending from word."""
    if len(word) <= 1 or not word.endswith("s"):
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("ouses"):
        return word[:-1]
    if word.endswith(("ses", "xes", "zes", "ches", "shes")):
        return word[:-2]
    if not word.endswith("ss"):
        return word[:-1]
    return word


def _camelize(value: str) -> str:
    parts = [p for p in re.split(r"[^a-zA-Z0-9]+", value) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def clean_name(hint: str, generic: bool = True) -> str:
    """
    Turn a contextual hint into a clean, singular, capitalized candidate name.

    Args:
        hint: Property name or caller-supplied name to derive from
        generic: True for object context, False for array-element context;
            selects the fallback used when nothing is left of the hint

    Returns:
        A candidate identifier (not yet made unique)
    """
    fallback = GENERIC_FALLBACK if generic else ITEM_FALLBACK
    if not hint:
        return fallback

    known = COMMON_NAMES.get(hint.lower())
    if known:
        return known

    cleaned = hint
    for affix in _AFFIXES:
        cleaned = affix.sub("", cleaned)

    cleaned = _camelize(singularize(cleaned))
    if not cleaned:
        return fallback
    if cleaned[0].isdigit():
        return f"{fallback}{cleaned}"
    return cleaned


class NameAllocator:
    """Hands out candidate names and keeps them unique for one inference run."""

    def __init__(self):
        self.allocated: Set[str] = set()
        self.reserved: Set[str] = set()

    def clean(self, hint: str, generic: bool = True) -> str:
        return clean_name(hint, generic)

    def reserve(self, name: str) -> None:
        """Hold name back for a later unique(name, claim=True)."""
        self.reserved.add(name)

    def unique(self, candidate: str, claim: bool = False) -> str:
        """Reserve candidate, or candidate plus the first free counter from 2."""
        name = candidate
        counter = 2
        while name in self.allocated or (name in self.reserved and not claim):
            name = f"{candidate}{counter}"
            counter += 1
        self.allocated.add(name)
        return name

    def __contains__(self, name: str) -> bool:
        return name in self.allocated
