"""
app/services/menu_item_service.py

Owner-scoped listing and maintenance of persisted menu items.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from app.config import get_menu_ingestion_settings
from app.domain.errors import MenuItemNotFoundError, NoValidItemsError, PersistenceFailure
from app.mappers.synonyms import CANONICAL_FIELDS
from app.repositories.base import MenuStoreError
from app.repositories.menu_item_repository import MenuItemRepository
from app.validators.menu_item_validator import MenuItemValidator
from db.models.menu_item import MenuItem

logger = logging.getLogger(__name__)


class MenuItemService:
    """
    Lists, updates, and deletes one owner's menu items.
    """

    def __init__(self, *, item_validator: MenuItemValidator | None = None) -> None:
        self._item_validator = item_validator or MenuItemValidator()

    def list_items(
        self,
        repository: MenuItemRepository,
        *,
        owner_id: str,
        category: str | None = None,
        is_available: bool | None = None,
    ) -> list[MenuItem]:
        return repository.list_items(
            owner_id=owner_id,
            category=category,
            is_available=is_available,
        )

    def update_item(
        self,
        repository: MenuItemRepository,
        *,
        owner_id: str,
        item_id: uuid.UUID,
        changes: Mapping[str, Any],
    ) -> MenuItem:
        """
        Merge ``changes`` over the stored item and revalidate the whole result.

        Unknown keys are ignored; the owner can never be changed.
        """

        record = repository.get(owner_id=owner_id, item_id=item_id)
        if record is None:
            raise MenuItemNotFoundError()

        merged = repository.to_canonical(record).to_dict()
        merged.update({key: value for key, value in changes.items() if key in CANONICAL_FIELDS})

        validation = self._item_validator.validate(merged, 1, owner_id=owner_id)
        if validation.item is None:
            raise NoValidItemsError(errors=validation.errors)

        sanitized = {
            key: value
            for key, value in validation.sanitized_data.items()
            if getattr(record, key) != value
        }
        try:
            record = repository.update(record, sanitized)
        except MenuStoreError as exc:
            raise PersistenceFailure("Unable to update menu item.") from exc

        logger.info("Menu item updated id=%s fields=%s", item_id, sorted(sanitized))
        return record

    def delete_item(
        self,
        repository: MenuItemRepository,
        *,
        owner_id: str,
        item_id: uuid.UUID,
    ) -> None:
        record = repository.get(owner_id=owner_id, item_id=item_id)
        if record is None:
            raise MenuItemNotFoundError()
        try:
            repository.delete(record)
        except MenuStoreError as exc:
            raise PersistenceFailure("Unable to delete menu item.") from exc
        logger.info("Menu item deleted id=%s", item_id)


@lru_cache(maxsize=1)
def get_menu_item_service() -> MenuItemService:
    settings = get_menu_ingestion_settings()
    return MenuItemService(
        item_validator=MenuItemValidator(default_currency=settings.default_currency),
    )
