"""
app/schemas package marker.
"""

from app.schemas.menu_ingestion import (
    CSVAnalysisResponse,
    IngestionReportResponse,
    MenuItemListResponse,
    MenuItemRecordResponse,
    MenuItemResponse,
    MenuItemUpdateRequest,
    SaveItemsRequest,
)

__all__ = [
    "CSVAnalysisResponse",
    "IngestionReportResponse",
    "MenuItemListResponse",
    "MenuItemRecordResponse",
    "MenuItemResponse",
    "MenuItemUpdateRequest",
    "SaveItemsRequest",
]
