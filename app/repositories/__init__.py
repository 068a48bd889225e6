"""
app/repositories package marker.
"""

from app.repositories.base import InsertOutcome, MenuItemStore, MenuStoreError
from app.repositories.menu_item_repository import MenuItemRepository

__all__ = [
    "InsertOutcome",
    "MenuItemRepository",
    "MenuItemStore",
    "MenuStoreError",
]
