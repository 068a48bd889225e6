"""
app/repositories/menu_item_repository.py

Persistence layer for canonical menu items.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.menu_item import CanonicalMenuItem
from app.repositories.base import InsertOutcome, MenuStoreError
from db.models.menu_item import MenuItem

logger = logging.getLogger(__name__)

# Failures that belong to one row; anything else aborts the batch.
_ITEM_LEVEL_ERRORS = (IntegrityError, DataError)


class MenuItemRepository:
    """
    Repository for per-item batch inserts and owner-scoped item access.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def insert_many(self, items: Sequence[CanonicalMenuItem]) -> list[InsertOutcome]:
        """
        Insert each item inside its own savepoint and commit the survivors.

        A row rejected by the database is rolled back alone and reported in
        its outcome; connection-level failures roll back everything and raise.
        """

        outcomes: list[InsertOutcome] = []
        try:
            for index, item in enumerate(items):
                try:
                    with self._session.begin_nested():
                        self._session.add(self._to_model(item))
                        self._session.flush()
                except _ITEM_LEVEL_ERRORS as exc:
                    reason = str(getattr(exc, "orig", None) or exc).strip()
                    outcomes.append(InsertOutcome(index=index, error=reason))
                    continue
                outcomes.append(InsertOutcome(index=index))
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise MenuStoreError(f"Failed to persist menu items: {exc}") from exc

        return outcomes

    def list_items(
        self,
        *,
        owner_id: str,
        category: str | None = None,
        is_available: bool | None = None,
    ) -> list[MenuItem]:
        stmt = select(MenuItem).where(MenuItem.owner_id == owner_id)
        if category:
            stmt = stmt.where(MenuItem.category == category)
        if is_available is not None:
            stmt = stmt.where(MenuItem.is_available.is_(is_available))
        stmt = stmt.order_by(MenuItem.category.asc(), MenuItem.name.asc())
        return list(self._session.execute(stmt).scalars().all())

    def get(self, *, owner_id: str, item_id: uuid.UUID) -> MenuItem | None:
        stmt = select(MenuItem).where(MenuItem.id == item_id, MenuItem.owner_id == owner_id)
        return self._session.execute(stmt).scalars().first()

    def update(self, record: MenuItem, changes: Mapping[str, Any]) -> MenuItem:
        """
        Apply already-sanitized field changes to one record and commit.
        """

        for field_name, value in changes.items():
            if field_name == "price":
                value = Decimal(str(value))
            setattr(record, field_name, value)
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise MenuStoreError(f"Failed to update menu item: {exc}") from exc
        return record

    def delete(self, record: MenuItem) -> None:
        try:
            self._session.delete(record)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise MenuStoreError(f"Failed to delete menu item: {exc}") from exc

    @staticmethod
    def _to_model(item: CanonicalMenuItem) -> MenuItem:
        return MenuItem(
            owner_id=item.owner_id,
            category=item.category,
            name=item.name,
            description=item.description,
            price=Decimal(str(item.price)),
            currency=item.currency,
            is_available=item.is_available,
        )

    @staticmethod
    def to_canonical(record: MenuItem) -> CanonicalMenuItem:
        return CanonicalMenuItem(
            category=record.category,
            name=record.name,
            description=record.description,
            price=float(record.price),
            currency=record.currency,
            is_available=record.is_available,
            owner_id=record.owner_id,
        )
