"""
app/domain package marker.
"""

from app.domain.menu_item import (
    DEFAULT_CURRENCY,
    CanonicalMenuItem,
    ExtractionResult,
    IngestionReport,
    MappedRow,
    PersistFailure,
    PersistResult,
    RawRow,
    ReportBuilder,
    RowValidationError,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "CanonicalMenuItem",
    "ExtractionResult",
    "IngestionReport",
    "MappedRow",
    "PersistFailure",
    "PersistResult",
    "RawRow",
    "ReportBuilder",
    "RowValidationError",
]
