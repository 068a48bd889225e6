"""
app/repositories/base.py

Store-agnostic contract for writing menu items.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from app.domain.menu_item import CanonicalMenuItem


class MenuStoreError(Exception):
    """Raised when the store cannot process a batch at all."""


@dataclass(frozen=True)
class InsertOutcome:
    """
    Per-item result of one batch insert. ``error`` is None when the item was saved.
    """

    index: int
    error: str | None = None

    @property
    def saved(self) -> bool:
        return self.error is None


class MenuItemStore(Protocol):
    """
    Any store able to report one outcome per submitted item.
    """

    def insert_many(self, items: Sequence[CanonicalMenuItem]) -> Sequence[InsertOutcome]:
        ...
