"""
app/api/routers/menu_ingestion.py

Menu ingestion and menu item HTTP endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Body, Depends, Form, Query, Response, status

from app.api.dependencies import (
    get_csv_upload,
    get_menu_item_repository,
    get_owner_id,
    get_pdf_upload,
)
from app.repositories.menu_item_repository import MenuItemRepository
from app.schemas.menu_ingestion import (
    CSVAnalysisResponse,
    IngestionReportResponse,
    MenuItemListResponse,
    MenuItemRecordResponse,
    MenuItemResponse,
    MenuItemUpdateRequest,
    SaveItemsRequest,
)
from app.services.menu_ingestion_service import MenuIngestionService, get_menu_ingestion_service
from app.services.menu_item_service import MenuItemService, get_menu_item_service

router = APIRouter(prefix="/menu", tags=["menu"])


@router.post("/analyze-csv", response_model=CSVAnalysisResponse)
def analyze_csv(
    content: bytes = Depends(get_csv_upload),
    ingestion_service: MenuIngestionService = Depends(get_menu_ingestion_service),
) -> CSVAnalysisResponse:
    """
    Report how a CSV would be mapped without validating or saving anything.
    """

    return CSVAnalysisResponse.from_analysis(ingestion_service.analyze_csv(content))


@router.post(
    "/upload-csv",
    response_model=IngestionReportResponse,
    response_model_exclude_none=True,
)
def upload_csv(
    content: bytes = Depends(get_csv_upload),
    mapping: str | None = Form(default=None, description="Optional JSON object: CSV header -> canonical field"),
    preview: bool = Query(default=False, description="Validate only; nothing is saved"),
    owner_id: str = Depends(get_owner_id),
    repository: MenuItemRepository = Depends(get_menu_item_repository),
    ingestion_service: MenuIngestionService = Depends(get_menu_ingestion_service),
) -> IngestionReportResponse:
    """
    Ingest one CSV menu file.
    """

    report = ingestion_service.ingest_csv(
        content=content,
        owner_id=owner_id,
        raw_mapping=mapping,
        preview=preview,
        store=repository,
    )
    return IngestionReportResponse.from_report(report)


@router.post(
    "/upload-pdf",
    response_model=IngestionReportResponse,
    response_model_exclude_none=True,
)
def upload_pdf(
    response: Response,
    content: bytes = Depends(get_pdf_upload),
    preview: bool = Query(default=True, description="Extract and validate only; nothing is saved"),
    owner_id: str = Depends(get_owner_id),
    repository: MenuItemRepository = Depends(get_menu_item_repository),
    ingestion_service: MenuIngestionService = Depends(get_menu_ingestion_service),
) -> IngestionReportResponse:
    """
    Extract menu items from a text-layer PDF.
    """

    report = ingestion_service.ingest_pdf(
        content=content,
        owner_id=owner_id,
        preview=preview,
        store=repository,
    )
    if not report.preview:
        response.status_code = (
            status.HTTP_207_MULTI_STATUS if report.failures else status.HTTP_201_CREATED
        )
    return IngestionReportResponse.from_report(report)


@router.post(
    "/save-items",
    response_model=IngestionReportResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def save_items(
    response: Response,
    payload: SaveItemsRequest = Body(...),
    owner_id: str = Depends(get_owner_id),
    repository: MenuItemRepository = Depends(get_menu_item_repository),
    ingestion_service: MenuIngestionService = Depends(get_menu_ingestion_service),
) -> IngestionReportResponse:
    """
    Persist operator-reviewed items, e.g. an edited PDF preview.
    """

    report = ingestion_service.save_items(
        items=payload.items,
        owner_id=owner_id,
        store=repository,
    )
    if report.failures:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return IngestionReportResponse.from_report(report)


@router.get("", response_model=MenuItemListResponse)
def list_menu_items(
    category: str | None = Query(default=None),
    is_available: bool | None = Query(default=None),
    owner_id: str = Depends(get_owner_id),
    repository: MenuItemRepository = Depends(get_menu_item_repository),
    item_service: MenuItemService = Depends(get_menu_item_service),
) -> MenuItemListResponse:
    records = item_service.list_items(
        repository,
        owner_id=owner_id,
        category=category,
        is_available=is_available,
    )
    return MenuItemListResponse(
        count=len(records),
        items=[MenuItemRecordResponse.from_record(record) for record in records],
    )


@router.put("/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    item_id: uuid.UUID,
    payload: MenuItemUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    repository: MenuItemRepository = Depends(get_menu_item_repository),
    item_service: MenuItemService = Depends(get_menu_item_service),
) -> MenuItemResponse:
    record = item_service.update_item(
        repository,
        owner_id=owner_id,
        item_id=item_id,
        changes=payload.model_dump(exclude_unset=True),
    )
    return MenuItemResponse(
        message="Menu item updated successfully",
        item=MenuItemRecordResponse.from_record(record),
    )


@router.delete("/{item_id}", response_model=MenuItemResponse)
def delete_menu_item(
    item_id: uuid.UUID,
    owner_id: str = Depends(get_owner_id),
    repository: MenuItemRepository = Depends(get_menu_item_repository),
    item_service: MenuItemService = Depends(get_menu_item_service),
) -> MenuItemResponse:
    item_service.delete_item(repository, owner_id=owner_id, item_id=item_id)
    return MenuItemResponse(message="Menu item deleted successfully")
