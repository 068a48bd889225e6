"""
app/services/persistence_coordinator.py

Submits validated menu items to a store and reconciles per-item failures.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.errors import PersistenceFailure
from app.domain.menu_item import CanonicalMenuItem, PersistFailure, PersistResult
from app.repositories.base import MenuItemStore, MenuStoreError

logger = logging.getLogger(__name__)


class BatchPersistenceCoordinator:
    """
    Writes one batch; a failing item never blocks the others.
    """

    def __init__(self, store: MenuItemStore) -> None:
        self._store = store

    def persist(self, items: Sequence[CanonicalMenuItem]) -> PersistResult:
        """
        Insert every item and report which ones the store refused.

        Raises:
            PersistenceFailure: when the whole batch fails, or the store does
                not report exactly one outcome per item.
        """

        if not items:
            return PersistResult(saved_count=0)

        try:
            outcomes = self._store.insert_many(items)
        except MenuStoreError as exc:
            logger.error("Menu batch persistence failed items=%d: %s", len(items), exc)
            raise PersistenceFailure("Unable to persist menu items.") from exc

        if sorted(outcome.index for outcome in outcomes) != list(range(len(items))):
            raise PersistenceFailure(
                f"Store reported {len(outcomes)} outcome(s) for {len(items)} item(s)."
            )

        failures = tuple(
            PersistFailure(
                index=outcome.index,
                item=items[outcome.index],
                reason=outcome.error or "",
            )
            for outcome in outcomes
            if not outcome.saved
        )
        saved_count = len(items) - len(failures)

        if failures:
            logger.warning(
                "Menu batch partially persisted saved=%d failed=%d",
                saved_count,
                len(failures),
            )
            for failure in failures:
                logger.warning(
                    "Menu item rejected by store index=%d name=%r reason=%s",
                    failure.index,
                    failure.item.name,
                    failure.reason,
                )
        else:
            logger.info("Menu batch persisted saved=%d", saved_count)

        return PersistResult(saved_count=saved_count, failures=failures)
