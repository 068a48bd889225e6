"""
app/services package marker.
"""

from app.services.menu_ingestion_service import (
    CSVAnalysis,
    MenuIngestionService,
    get_menu_ingestion_service,
)
from app.services.menu_item_service import MenuItemService, get_menu_item_service
from app.services.persistence_coordinator import BatchPersistenceCoordinator

__all__ = [
    "BatchPersistenceCoordinator",
    "CSVAnalysis",
    "MenuIngestionService",
    "get_menu_ingestion_service",
    "MenuItemService",
    "get_menu_item_service",
]
