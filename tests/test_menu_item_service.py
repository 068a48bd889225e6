from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from app.domain.errors import MenuItemNotFoundError, NoValidItemsError
from app.repositories.menu_item_repository import MenuItemRepository
from app.services.menu_item_service import MenuItemService
from db.models.menu_item import MenuItem


class _DictRepository(MenuItemRepository):
    """Repository double keyed by (owner, id); no session involved."""

    def __init__(self) -> None:
        self.records: dict[tuple[str, uuid.UUID], MenuItem] = {}
        self.updates: list[dict] = []

    def add(self, **values) -> MenuItem:
        record = MenuItem(id=uuid.uuid4(), **values)
        self.records[(record.owner_id, record.id)] = record
        return record

    def get(self, *, owner_id: str, item_id: uuid.UUID) -> MenuItem | None:
        return self.records.get((owner_id, item_id))

    def update(self, record: MenuItem, changes) -> MenuItem:
        self.updates.append(dict(changes))
        for key, value in changes.items():
            setattr(record, key, Decimal(str(value)) if key == "price" else value)
        return record

    def delete(self, record: MenuItem) -> None:
        del self.records[(record.owner_id, record.id)]


@pytest.fixture()
def repository() -> _DictRepository:
    return _DictRepository()


@pytest.fixture()
def record(repository: _DictRepository) -> MenuItem:
    return repository.add(
        owner_id="vendor-1",
        category="Mains",
        name="Rice",
        description="",
        price=Decimal("450.00"),
        currency="LKR",
        is_available=True,
    )


def test_update_changes_only_the_sent_fields(repository: _DictRepository, record: MenuItem) -> None:
    updated = MenuItemService().update_item(
        repository,
        owner_id="vendor-1",
        item_id=record.id,
        changes={"price": "500", "is_available": "no"},
    )

    assert updated.price == Decimal("500.0")
    assert updated.is_available is False
    assert updated.name == "Rice"
    assert repository.updates == [{"price": 500.0, "is_available": False}]


def test_update_ignores_owner_changes(repository: _DictRepository, record: MenuItem) -> None:
    MenuItemService().update_item(
        repository,
        owner_id="vendor-1",
        item_id=record.id,
        changes={"owner_id": "vendor-2", "ownerId": "vendor-2"},
    )

    assert record.owner_id == "vendor-1"


def test_invalid_update_is_rejected(repository: _DictRepository, record: MenuItem) -> None:
    with pytest.raises(NoValidItemsError) as exc_info:
        MenuItemService().update_item(
            repository,
            owner_id="vendor-1",
            item_id=record.id,
            changes={"price": "-1"},
        )

    assert exc_info.value.errors[0].message == "Row 1: Price must be a valid positive number"
    assert repository.updates == []


def test_other_owners_cannot_see_the_item(repository: _DictRepository, record: MenuItem) -> None:
    with pytest.raises(MenuItemNotFoundError):
        MenuItemService().update_item(
            repository,
            owner_id="vendor-2",
            item_id=record.id,
            changes={"name": "Stolen"},
        )

    with pytest.raises(MenuItemNotFoundError):
        MenuItemService().delete_item(repository, owner_id="vendor-2", item_id=record.id)


def test_delete_removes_the_item(repository: _DictRepository, record: MenuItem) -> None:
    MenuItemService().delete_item(repository, owner_id="vendor-1", item_id=record.id)

    assert repository.records == {}
