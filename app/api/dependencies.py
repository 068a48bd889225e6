"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Depends, File, Header, UploadFile
from sqlalchemy.orm import Session

from app.config import MenuIngestionSettings, get_menu_ingestion_settings
from app.repositories.menu_item_repository import MenuItemRepository
from app.validators.upload_validator import UploadKind, validate_upload
from db.session import get_db


def _read_upload(
    file: UploadFile | None,
    *,
    expected: UploadKind,
    settings: MenuIngestionSettings,
) -> bytes:
    """
    Read at most one byte past the size cap and validate the upload.
    """

    if file is None:
        return validate_upload(
            filename=None,
            content_type=None,
            content=None,
            expected=expected,
            max_bytes=settings.max_upload_bytes,
        )
    try:
        content = file.file.read(settings.max_upload_bytes + 1)
    finally:
        file.file.close()
    return validate_upload(
        filename=file.filename,
        content_type=file.content_type,
        content=content,
        expected=expected,
        max_bytes=settings.max_upload_bytes,
    )


def get_csv_upload(
    file: UploadFile | None = File(default=None),
    settings: MenuIngestionSettings = Depends(get_menu_ingestion_settings),
) -> bytes:
    """
    Validate that the uploaded file is an allow-listed CSV and return its bytes.
    """

    return _read_upload(file, expected=UploadKind.CSV, settings=settings)


def get_pdf_upload(
    file: UploadFile | None = File(default=None),
    settings: MenuIngestionSettings = Depends(get_menu_ingestion_settings),
) -> bytes:
    """
    Validate that the uploaded file is an allow-listed PDF and return its bytes.
    """

    return _read_upload(file, expected=UploadKind.PDF, settings=settings)


def get_owner_id(
    owner_id: str = Header(..., alias="X-Owner-Id", min_length=1, max_length=64),
) -> str:
    return owner_id.strip()


def get_menu_item_repository(db: Session = Depends(get_db)) -> MenuItemRepository:
    return MenuItemRepository(db)
