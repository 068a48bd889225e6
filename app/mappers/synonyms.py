"""
app/mappers/synonyms.py

Header normalization and the canonical field synonym dictionary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, Sequence

CANONICAL_FIELDS: tuple[str, ...] = (
    "category",
    "name",
    "description",
    "price",
    "currency",
    "is_available",
)

REQUIRED_CANONICAL_FIELDS: tuple[str, ...] = (
    "category",
    "name",
    "price",
)

DEFAULT_COLUMN_SYNONYMS: dict[str, tuple[str, ...]] = {
    "category": ("category", "cat", "type", "item_type", "menu_category", "section"),
    "name": ("name", "item_name", "item", "dish", "dish_name", "product", "product_name", "title"),
    "description": ("description", "desc", "details", "info", "item_description", "about"),
    "price": ("price", "cost", "amount", "rate", "unit_price", "value"),
    "currency": ("currency", "curr", "currency_code"),
    "is_available": ("is_available", "available", "in_stock", "status", "active", "enabled"),
}

_INVALID_CHARS = re.compile(r"[^a-z0-9_\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s_-]+")


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.

    "  Unit-Price ($) " -> "unit_price"
    """

    lowered = _INVALID_CHARS.sub("", header.strip().lower())
    return _SEPARATOR_RUNS.sub("_", lowered).strip("_")


@dataclass(frozen=True)
class SynonymDictionary:
    """
    Immutable canonical field -> known header spellings.

    Lookup order follows declaration order, so the first-declared field wins
    when two synonym sets collide.
    """

    entries: tuple[tuple[str, tuple[str, ...]], ...]
    _normalized: tuple[tuple[str, frozenset[str]], ...] = field(
        init=False,
        repr=False,
        compare=False,
    )

    def __post_init__(self) -> None:
        normalized = tuple(
            (
                canonical,
                frozenset(normalize_header(s) for s in synonyms if normalize_header(s)),
            )
            for canonical, synonyms in self.entries
        )
        object.__setattr__(self, "_normalized", normalized)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "SynonymDictionary":
        return cls(
            entries=tuple(
                (canonical, tuple(synonyms)) for canonical, synonyms in mapping.items()
            )
        )

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(canonical for canonical, _ in self.entries)

    def lookup(self, normalized_header: str) -> str | None:
        """
        Return the canonical field whose synonym set contains the header.
        """

        for canonical, synonyms in self._normalized:
            if normalized_header in synonyms:
                return canonical
        return None


DEFAULT_SYNONYMS = SynonymDictionary.from_mapping(DEFAULT_COLUMN_SYNONYMS)
