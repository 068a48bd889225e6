"""
app/domain/menu_item.py

Domain models used by the menu ingestion flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

DEFAULT_CURRENCY = "LKR"


@dataclass(frozen=True)
class RawRow:
    """
    One parsed source row: original header -> raw value, with a 1-based ordinal.
    """

    ordinal: int
    values: Mapping[str, str]


@dataclass(frozen=True)
class MappedRow:
    """
    Source row re-keyed by canonical field name, not yet validated.
    """

    ordinal: int
    fields: Mapping[str, Any]


@dataclass(frozen=True)
class CanonicalMenuItem:
    """
    Fully validated menu item ready for persistence.
    """

    category: str
    name: str
    price: float
    description: str = ""
    currency: str = DEFAULT_CURRENCY
    is_available: bool = True
    owner_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "currency": self.currency,
            "is_available": self.is_available,
            "ownerId": self.owner_id,
        }


@dataclass(frozen=True)
class RowValidationError:
    """
    One row-level validation or persistence diagnostic.
    """

    row_number: int
    message: str
    column: str | None = None


@dataclass(frozen=True)
class ExtractionResult:
    """
    Raw items returned by the structured extraction service.
    """

    items: tuple[dict[str, Any], ...]
    page_count: int = 1

    @property
    def total_items(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class PersistFailure:
    """
    One item the store refused, with the reason reported by the store.
    """

    index: int
    item: CanonicalMenuItem
    reason: str


@dataclass(frozen=True)
class PersistResult:
    saved_count: int
    failures: tuple[PersistFailure, ...] = ()

    @property
    def is_partial(self) -> bool:
        return bool(self.failures)


@dataclass(frozen=True)
class IngestionReport:
    """
    End-of-run ingestion outcome. Immutable once returned.
    """

    source: str
    preview: bool
    total: int
    valid_count: int
    skipped_count: int
    saved_count: int
    errors: tuple[RowValidationError, ...] = ()
    failures: tuple[PersistFailure, ...] = ()
    preview_data: tuple[CanonicalMenuItem, ...] | None = None
    page_count: int | None = None
    applied_mapping: Mapping[str, str] | None = None
    unmapped_columns: tuple[str, ...] = ()


@dataclass
class ReportBuilder:
    """
    Append-only accumulator for one ingestion run.
    """

    source: str
    preview: bool
    total: int = 0
    valid_items: list[CanonicalMenuItem] = field(default_factory=list)
    valid_ordinals: list[int] = field(default_factory=list)
    skipped_count: int = 0
    errors: list[RowValidationError] = field(default_factory=list)

    def add_valid(self, item: CanonicalMenuItem, ordinal: int) -> None:
        self.valid_items.append(item)
        self.valid_ordinals.append(ordinal)

    def add_skipped(self, errors: list[RowValidationError]) -> None:
        self.skipped_count += 1
        self.errors.extend(errors)

    def build(
        self,
        *,
        persist_result: PersistResult | None = None,
        preview_limit: int = 10,
        page_count: int | None = None,
        applied_mapping: Mapping[str, str] | None = None,
        unmapped_columns: tuple[str, ...] = (),
    ) -> IngestionReport:
        errors = list(self.errors)
        failures: tuple[PersistFailure, ...] = ()
        saved_count = 0
        if persist_result is not None:
            saved_count = persist_result.saved_count
            failures = persist_result.failures
            for failure in failures:
                errors.append(
                    RowValidationError(
                        row_number=self.valid_ordinals[failure.index],
                        message=f"Database error on item '{failure.item.name}': {failure.reason}",
                    )
                )

        return IngestionReport(
            source=self.source,
            preview=self.preview,
            total=self.total,
            valid_count=len(self.valid_items),
            skipped_count=self.skipped_count,
            saved_count=saved_count,
            errors=tuple(errors),
            failures=failures,
            preview_data=tuple(self.valid_items[:preview_limit]) if self.preview else None,
            page_count=page_count,
            applied_mapping=dict(applied_mapping) if applied_mapping is not None else None,
            unmapped_columns=unmapped_columns,
        )
