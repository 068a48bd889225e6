"""
app/schemas/menu_ingestion.py

Request and response schemas for menu ingestion endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.menu_item import CanonicalMenuItem, IngestionReport
from app.services.menu_ingestion_service import CSVAnalysis


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RowErrorResponse(BaseModel):
    """
    One row-level diagnostic, numbered from 1 in input order.
    """

    row: int = Field(..., ge=1)
    message: str


class PersistFailureResponse(_CamelModel):
    index: int = Field(..., ge=0)
    name: str
    reason: str


class MenuItemPayload(_CamelModel):
    """
    Canonical menu item as it appears in preview data.
    """

    category: str
    name: str
    description: str = ""
    price: float
    currency: str
    is_available: bool
    owner_id: str | None = Field(default=None, alias="ownerId")

    @classmethod
    def from_item(cls, item: CanonicalMenuItem) -> "MenuItemPayload":
        return cls(
            category=item.category,
            name=item.name,
            description=item.description,
            price=item.price,
            currency=item.currency,
            is_available=item.is_available,
            owner_id=item.owner_id,
        )


class IngestionSummaryResponse(_CamelModel):
    """
    Row counts for one run; CSV runs report ``totalRows``, document and
    reviewed-item runs report ``totalItems``.
    """

    total_rows: int | None = Field(default=None, ge=0, alias="totalRows")
    total_items: int | None = Field(default=None, ge=0, alias="totalItems")
    valid_count: int = Field(..., ge=0, alias="validCount")
    skipped_count: int = Field(..., ge=0, alias="skippedCount")
    saved_count: int = Field(..., ge=0, alias="savedCount")
    pages: int | None = None

    @classmethod
    def from_report(cls, report: IngestionReport) -> "IngestionSummaryResponse":
        is_csv = report.source == "csv"
        return cls(
            total_rows=report.total if is_csv else None,
            total_items=None if is_csv else report.total,
            valid_count=report.valid_count,
            skipped_count=report.skipped_count,
            saved_count=report.saved_count,
            pages=report.page_count,
        )


class MappingInfoResponse(_CamelModel):
    applied: dict[str, str]
    unmapped_columns: list[str] = Field(default_factory=list, alias="unmappedColumns")


class IngestionReportResponse(_CamelModel):
    """
    API response model for one ingestion run.
    """

    success: bool
    message: str
    preview: bool
    summary: IngestionSummaryResponse
    mapping: MappingInfoResponse | None = None
    errors: list[RowErrorResponse] | None = None
    failures: list[PersistFailureResponse] | None = None
    preview_data: list[MenuItemPayload] | None = Field(default=None, alias="previewData")

    @classmethod
    def from_report(cls, report: IngestionReport) -> "IngestionReportResponse":
        if report.preview:
            message = f"Preview: {report.valid_count} valid item(s) of {report.total}; nothing saved"
        else:
            message = f"Saved {report.saved_count} of {report.total} item(s)"
        mapping = None
        if report.applied_mapping is not None:
            mapping = MappingInfoResponse(
                applied=dict(report.applied_mapping),
                unmapped_columns=list(report.unmapped_columns),
            )
        return cls(
            success=True,
            message=message,
            preview=report.preview,
            summary=IngestionSummaryResponse.from_report(report),
            mapping=mapping,
            errors=[
                RowErrorResponse(row=error.row_number, message=error.message)
                for error in report.errors
            ]
            or None,
            failures=[
                PersistFailureResponse(
                    index=failure.index,
                    name=failure.item.name,
                    reason=failure.reason,
                )
                for failure in report.failures
            ]
            or None,
            preview_data=(
                [MenuItemPayload.from_item(item) for item in report.preview_data]
                if report.preview_data is not None
                else None
            ),
        )


class ColumnSuggestionResponse(_CamelModel):
    column: str
    suggested_fields: list[str] = Field(..., alias="suggestedFields")


class CSVAnalysisBody(_CamelModel):
    total_rows: int = Field(..., ge=0, alias="totalRows")
    columns: int = Field(..., ge=0)
    detected_columns: list[str] = Field(..., alias="detectedColumns")
    auto_mapping: dict[str, str] = Field(..., alias="autoMapping")
    unmapped_columns: list[str] = Field(..., alias="unmappedColumns")
    missing_required_fields: list[str] = Field(..., alias="missingRequiredFields")
    suggestions: list[ColumnSuggestionResponse] = Field(default_factory=list)
    sample_data: list[dict[str, str]] = Field(..., alias="sampleData")
    ready_to_upload: bool = Field(..., alias="readyToUpload")


class CSVAnalysisResponse(_CamelModel):
    success: bool
    message: str
    analysis: CSVAnalysisBody

    @classmethod
    def from_analysis(cls, analysis: CSVAnalysis) -> "CSVAnalysisResponse":
        message = (
            "CSV is ready to upload"
            if analysis.ready_to_upload
            else "CSV requires a custom mapping before upload"
        )
        return cls(
            success=True,
            message=message,
            analysis=CSVAnalysisBody(
                total_rows=analysis.total_rows,
                columns=len(analysis.detected_columns),
                detected_columns=list(analysis.detected_columns),
                auto_mapping=analysis.auto_mapping,
                unmapped_columns=list(analysis.unmapped_columns),
                missing_required_fields=list(analysis.missing_required),
                suggestions=[
                    ColumnSuggestionResponse(
                        column=suggestion.column,
                        suggested_fields=list(suggestion.suggested_fields),
                    )
                    for suggestion in analysis.suggestions
                ],
                sample_data=[dict(row) for row in analysis.sample_data],
                ready_to_upload=analysis.ready_to_upload,
            ),
        )


class SaveItemsRequest(BaseModel):
    """
    Operator-reviewed items; each is validated exactly like an extracted one.
    """

    items: list[dict[str, Any]] = Field(default_factory=list)


class MenuItemUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: str | None = None
    name: str | None = None
    description: str | None = None
    price: float | str | None = None
    currency: str | None = None
    is_available: bool | str | None = None


class MenuItemRecordResponse(_CamelModel):
    id: uuid.UUID
    owner_id: str = Field(..., alias="ownerId")
    category: str
    name: str
    description: str
    price: float
    currency: str
    is_available: bool
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_record(cls, record: Any) -> "MenuItemRecordResponse":
        return cls(
            id=record.id,
            owner_id=record.owner_id,
            category=record.category,
            name=record.name,
            description=record.description or "",
            price=float(record.price),
            currency=record.currency,
            is_available=record.is_available,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class MenuItemListResponse(BaseModel):
    success: bool = True
    count: int = Field(..., ge=0)
    items: list[MenuItemRecordResponse]


class MenuItemResponse(BaseModel):
    success: bool = True
    message: str
    item: MenuItemRecordResponse | None = None
