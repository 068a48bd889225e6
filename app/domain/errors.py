"""
app/domain/errors.py

Exception taxonomy for the menu ingestion pipeline.
"""

from __future__ import annotations

from typing import Any, Sequence

from app import failure_codes


class MenuIngestionError(Exception):
    """Base exception for menu ingestion failures."""

    code: str = "menu_ingestion_error"
    status_code: int = 500

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "code": self.code,
            "message": self.message,
        }
        if self.hint:
            payload["hint"] = self.hint
        return payload


# ---------------------------------------------------------------------------
# Rejections (raised before any row is processed)
# ---------------------------------------------------------------------------


class UploadRejectedError(MenuIngestionError):
    """Base exception for requests rejected on their input alone."""

    status_code = 400


class FileMissingError(UploadRejectedError):
    code = failure_codes.FILE_MISSING


class UnsupportedFormatError(UploadRejectedError):
    code = failure_codes.UNSUPPORTED_FORMAT


class FileTooLargeError(UploadRejectedError):
    code = failure_codes.FILE_TOO_LARGE
    status_code = 413


class ParseFailureError(UploadRejectedError):
    code = failure_codes.PARSE_FAILURE


class EmptyOrImageOnlyDocumentError(UploadRejectedError):
    code = failure_codes.EMPTY_OR_IMAGE_ONLY_DOCUMENT


class InvalidMappingFormatError(UploadRejectedError):
    code = failure_codes.INVALID_MAPPING_FORMAT


class MappingIncompleteError(UploadRejectedError):
    """
    Raised when required canonical fields cannot be resolved from the headers.
    """

    code = failure_codes.MAPPING_INCOMPLETE

    def __init__(
        self,
        *,
        missing_required: Sequence[str],
        unmapped_columns: Sequence[str],
        suggestions: Sequence[Any] = (),
    ) -> None:
        super().__init__(
            "Cannot proceed: Required fields are missing from CSV",
            hint='Provide a custom mapping using the "mapping" parameter',
        )
        self.missing_required = tuple(missing_required)
        self.unmapped_columns = tuple(unmapped_columns)
        self.suggestions = tuple(suggestions)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["missingFields"] = list(self.missing_required)
        payload["unmappedColumns"] = list(self.unmapped_columns)
        if self.suggestions:
            payload["suggestions"] = [
                {"column": item.column, "suggestedFields": list(item.suggested_fields)}
                for item in self.suggestions
            ]
        return payload


class NoMenuItemsExtractedError(UploadRejectedError):
    code = failure_codes.NO_ITEMS_EXTRACTED

    def __init__(self) -> None:
        super().__init__(
            "No menu items could be extracted from the PDF",
            hint="Please check if the PDF contains a valid menu with prices and item names.",
        )

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["totalItems"] = 0
        return payload


class NoValidItemsError(UploadRejectedError):
    code = failure_codes.NO_VALID_ITEMS

    def __init__(self, *, errors: Sequence[Any] = ()) -> None:
        super().__init__("No valid menu items to save")
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = [
                {"row": error.row_number, "message": error.message}
                for error in self.errors
            ]
        return payload


class MenuItemNotFoundError(MenuIngestionError):
    code = failure_codes.MENU_ITEM_NOT_FOUND
    status_code = 404

    def __init__(self) -> None:
        super().__init__("Menu item not found")


# ---------------------------------------------------------------------------
# Request-level failures
# ---------------------------------------------------------------------------


class ExtractionServiceFailure(MenuIngestionError):
    """Raised when the structured-extraction service call errors."""

    code = failure_codes.EXTRACTION_SERVICE_FAILURE
    status_code = 502

    def __init__(self, message: str) -> None:
        super().__init__(
            message,
            hint="Ensure the PDF contains readable text. Scanned images may require OCR processing.",
        )


class ExtractionSchemaViolation(MenuIngestionError):
    """
    Raised when the extraction response breaks the output contract.

    Attributes:
        stage: Which check failed ("json_parse", "not_array" or "missing_fields").
        errors: Human-readable error descriptions.
        raw_response: The original response text.
    """

    code = failure_codes.EXTRACTION_SCHEMA_VIOLATION
    status_code = 502

    def __init__(self, *, stage: str, errors: Sequence[str], raw_response: str) -> None:
        self.stage = stage
        self.errors = list(errors)
        self.raw_response = raw_response
        super().__init__(
            f"Extraction response failed at stage '{stage}': " + "; ".join(self.errors),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["stage"] = self.stage
        return payload


class PersistenceFailure(MenuIngestionError):
    """Raised when an entire batch could not be written."""

    code = failure_codes.PERSISTENCE_FAILURE
    status_code = 500
