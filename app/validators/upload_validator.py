"""
app/validators/upload_validator.py

Allow-list checks for uploaded menu files.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath

from app.domain.errors import FileMissingError, FileTooLargeError, UnsupportedFormatError


class UploadKind(str, Enum):
    CSV = "csv"
    PDF = "pdf"


ALLOWED_CONTENT_TYPES: dict[UploadKind, frozenset[str]] = {
    UploadKind.CSV: frozenset({"text/csv", "application/vnd.ms-excel", "text/plain"}),
    UploadKind.PDF: frozenset({"application/pdf"}),
}

ALLOWED_EXTENSIONS: dict[UploadKind, str] = {
    UploadKind.CSV: ".csv",
    UploadKind.PDF: ".pdf",
}


def classify_upload(filename: str | None, content_type: str | None) -> UploadKind:
    """
    Return the upload kind when both MIME type and extension are allow-listed.
    """

    extension = PurePath((filename or "").strip().lower()).suffix
    mime = (content_type or "").split(";", 1)[0].strip().lower()

    for kind, extension_allowed in ALLOWED_EXTENSIONS.items():
        if extension == extension_allowed and mime in ALLOWED_CONTENT_TYPES[kind]:
            return kind

    raise UnsupportedFormatError("Only CSV and PDF files are allowed")


def validate_upload(
    *,
    filename: str | None,
    content_type: str | None,
    content: bytes | None,
    expected: UploadKind,
    max_bytes: int,
) -> bytes:
    """
    Validate one uploaded file for the given pipeline and return its bytes.
    """

    if content is None:
        raise FileMissingError("No file uploaded")

    kind = classify_upload(filename, content_type)
    if kind is not expected:
        if expected is UploadKind.PDF:
            raise UnsupportedFormatError("Invalid file type. Only PDF files are accepted.")
        raise UnsupportedFormatError("Invalid file type. Only CSV files are accepted.")

    if len(content) > max_bytes:
        raise FileTooLargeError(
            f"File exceeds the {max_bytes // (1024 * 1024)} MB upload limit"
        )
    return content
