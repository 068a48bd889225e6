"""Shared failure code constants for menu ingestion error handling."""

FILE_MISSING = "file_missing"
UNSUPPORTED_FORMAT = "unsupported_format"
FILE_TOO_LARGE = "file_too_large"
PARSE_FAILURE = "parse_failure"
EMPTY_OR_IMAGE_ONLY_DOCUMENT = "empty_or_image_only_document"
INVALID_MAPPING_FORMAT = "invalid_mapping_format"
MAPPING_INCOMPLETE = "mapping_incomplete"
NO_ITEMS_EXTRACTED = "no_items_extracted"
NO_VALID_ITEMS = "no_valid_items"
EXTRACTION_SERVICE_FAILURE = "extraction_service_failure"
EXTRACTION_SCHEMA_VIOLATION = "extraction_schema_violation"
PERSISTENCE_FAILURE = "persistence_failure"
PERSISTENCE_PARTIAL_FAILURE = "persistence_partial_failure"
MENU_ITEM_NOT_FOUND = "menu_item_not_found"

# Rejected before any row is processed.
REJECTION_CODES = [
    FILE_MISSING,
    UNSUPPORTED_FORMAT,
    FILE_TOO_LARGE,
    PARSE_FAILURE,
    EMPTY_OR_IMAGE_ONLY_DOCUMENT,
    INVALID_MAPPING_FORMAT,
    MAPPING_INCOMPLETE,
    NO_ITEMS_EXTRACTED,
    NO_VALID_ITEMS,
]

# Surfaced as request-level failures.
CRITICAL_FAILURES = [
    EXTRACTION_SERVICE_FAILURE,
    EXTRACTION_SCHEMA_VIOLATION,
    PERSISTENCE_FAILURE,
]
