"""
app/services/menu_ingestion_service.py

Service layer for menu ingestion workflow orchestration.

One request runs one synchronous pipeline:

    Received -> Parsed -> Mapped -> Transformed -> Validated
             -> PreviewReported | Persisted -> Reported

Rejections (bad upload, bad mapping, unparseable or blank input, unmapped
required fields) are raised before any row is processed. Invalid rows never
abort the batch; they are skipped and reported. Per-item store failures only
lower ``saved_count``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from app.config import get_extraction_settings, get_menu_ingestion_settings
from app.domain.errors import (
    EmptyOrImageOnlyDocumentError,
    NoMenuItemsExtractedError,
    NoValidItemsError,
)
from app.domain.menu_item import IngestionReport, PersistResult, ReportBuilder
from app.mappers.column_mapper import ColumnMapper, ColumnSuggestion
from app.parsing.csv_parser import parse_csv
from app.parsing.pdf_text_extractor import PDFTextExtractor
from app.repositories.base import MenuItemStore
from app.services.persistence_coordinator import BatchPersistenceCoordinator
from app.validators.mapping_validator import MappingValidator
from app.validators.menu_item_validator import MenuItemValidator
from menu_extraction import MenuExtractionPromptBuilder, StructuredMenuExtractor, build_adapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CSVAnalysis:
    """
    Mapping analysis of one CSV file; nothing is validated or persisted.
    """

    total_rows: int
    detected_columns: tuple[str, ...]
    auto_mapping: dict[str, str]
    unmapped_columns: tuple[str, ...]
    missing_required: tuple[str, ...]
    suggestions: tuple[ColumnSuggestion, ...]
    sample_data: tuple[dict[str, str], ...]

    @property
    def ready_to_upload(self) -> bool:
        return not self.missing_required


class MenuIngestionService:
    """
    Coordinates parsing, mapping, validation, and persistence of menu uploads.
    """

    def __init__(
        self,
        *,
        mapper: ColumnMapper | None = None,
        mapping_validator: MappingValidator | None = None,
        item_validator: MenuItemValidator | None = None,
        text_extractor: PDFTextExtractor | None = None,
        menu_extractor: StructuredMenuExtractor | None = None,
        preview_limit: int = 10,
        sample_rows: int = 3,
        log_validation_errors: bool = True,
    ) -> None:
        self._mapper = mapper or ColumnMapper()
        self._mapping_validator = mapping_validator or MappingValidator(
            canonical_fields=self._mapper.canonical_fields,
        )
        self._item_validator = item_validator or MenuItemValidator()
        self._text_extractor = text_extractor or PDFTextExtractor()
        self._menu_extractor = menu_extractor
        self._preview_limit = max(1, preview_limit)
        self._sample_rows = max(1, sample_rows)
        self._log_validation_errors = log_validation_errors

    # ------------------------------------------------------------------
    # Tabular path
    # ------------------------------------------------------------------

    def analyze_csv(self, content: bytes) -> CSVAnalysis:
        """
        Auto-map a CSV without overrides and report what an upload would need.
        """

        parsed = parse_csv(content)
        result = self._mapper.create_mapping(parsed.headers)
        suggestions = self._mapper.suggest(result.unmapped_columns)
        logger.info(
            "Menu CSV analyzed rows=%d columns=%d missing_required=%s",
            len(parsed.rows),
            len(parsed.headers),
            list(result.missing_required),
        )
        return CSVAnalysis(
            total_rows=len(parsed.rows),
            detected_columns=parsed.headers,
            auto_mapping=dict(result.mapping),
            unmapped_columns=result.unmapped_columns,
            missing_required=result.missing_required,
            suggestions=tuple(suggestions),
            sample_data=tuple(
                {header: row.values.get(header, "") for header in parsed.headers}
                for row in parsed.rows[: self._sample_rows]
            ),
        )

    def ingest_csv(
        self,
        *,
        content: bytes,
        owner_id: str,
        raw_mapping: str | Mapping[str, Any] | None = None,
        preview: bool = False,
        store: MenuItemStore | None = None,
    ) -> IngestionReport:
        """
        Map, validate, and (unless previewing) persist every CSV row.

        Args:
            content:      Raw CSV bytes.
            owner_id:     Opaque vendor id attached to every valid item.
            raw_mapping:  Optional operator overrides (raw header -> canonical
                          field) as a JSON string or object.
            preview:      When True nothing is written.
            store:        Target store; required unless previewing.
        """

        overrides = self._mapping_validator.parse_overrides(raw_mapping)

        parsed = parse_csv(content)
        logger.info("Menu CSV parsed rows=%d columns=%d", len(parsed.rows), len(parsed.headers))

        result = self._mapper.create_mapping(parsed.headers, overrides)
        self._mapping_validator.ensure_complete(result, self._mapper)
        logger.info(
            "Menu CSV mapped mapping=%s unmapped=%s",
            dict(result.mapping),
            list(result.unmapped_columns),
        )

        builder = ReportBuilder(source="csv", preview=preview, total=len(parsed.rows))
        for row in parsed.rows:
            mapped = self._mapper.transform_row(row, result.mapping)
            self._accept(builder, mapped.fields, mapped.ordinal, owner_id)

        persist_result = self._finish(builder, store)
        return builder.build(
            persist_result=persist_result,
            preview_limit=self._preview_limit,
            applied_mapping=result.mapping,
            unmapped_columns=result.unmapped_columns,
        )

    # ------------------------------------------------------------------
    # Document path
    # ------------------------------------------------------------------

    def ingest_pdf(
        self,
        *,
        content: bytes,
        owner_id: str,
        preview: bool = True,
        store: MenuItemStore | None = None,
    ) -> IngestionReport:
        """
        Extract menu items from a PDF's text layer, validate, and optionally persist.
        """

        if self._menu_extractor is None:
            raise RuntimeError("Structured menu extraction is not configured.")

        document = self._text_extractor.extract_text(content)
        if document.is_blank:
            raise EmptyOrImageOnlyDocumentError(
                "PDF appears to be empty or contains only images. OCR processing required.",
                hint="Ensure the PDF contains readable text.",
            )

        extraction = self._menu_extractor.extract_items(
            document.text,
            page_count=document.page_count,
        )
        if extraction.total_items == 0:
            logger.info("Menu PDF yielded no items pages=%d", document.page_count)
            raise NoMenuItemsExtractedError()

        builder = ReportBuilder(source="pdf", preview=preview, total=extraction.total_items)
        for ordinal, item in enumerate(extraction.items, start=1):
            self._accept(builder, item, ordinal, owner_id)

        if not preview and not builder.valid_items:
            raise NoValidItemsError(errors=builder.errors)

        persist_result = self._finish(builder, store)
        return builder.build(
            persist_result=persist_result,
            preview_limit=self._preview_limit,
            page_count=extraction.page_count,
        )

    def save_items(
        self,
        *,
        items: Sequence[Mapping[str, Any]],
        owner_id: str,
        store: MenuItemStore,
    ) -> IngestionReport:
        """
        Validate and persist operator-reviewed items (e.g. an edited PDF preview).
        """

        builder = ReportBuilder(source="items", preview=False, total=len(items))
        for ordinal, item in enumerate(items, start=1):
            self._accept(builder, item, ordinal, owner_id)

        if not builder.valid_items:
            raise NoValidItemsError(errors=builder.errors)

        persist_result = self._finish(builder, store)
        return builder.build(persist_result=persist_result, preview_limit=self._preview_limit)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accept(
        self,
        builder: ReportBuilder,
        fields: Mapping[str, Any],
        ordinal: int,
        owner_id: str,
    ) -> None:
        validation = self._item_validator.validate(fields, ordinal, owner_id=owner_id)
        if validation.item is not None:
            builder.add_valid(validation.item, ordinal)
            return

        builder.add_skipped(list(validation.errors))
        if self._log_validation_errors:
            for error in validation.errors:
                logger.warning(
                    "Menu validation error source=%s row=%s column=%s message=%s",
                    builder.source,
                    error.row_number,
                    error.column,
                    error.message,
                )

    def _finish(
        self,
        builder: ReportBuilder,
        store: MenuItemStore | None,
    ) -> PersistResult | None:
        logger.info(
            "Menu %s validated total=%d valid=%d skipped=%d",
            builder.source,
            builder.total,
            len(builder.valid_items),
            builder.skipped_count,
        )
        if builder.preview:
            logger.info("Menu %s preview reported; nothing persisted", builder.source)
            return None
        if store is None:
            raise ValueError("A store is required when not in preview mode.")
        return BatchPersistenceCoordinator(store).persist(builder.valid_items)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_menu_ingestion_service() -> MenuIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """

    settings = get_menu_ingestion_settings()
    extraction = get_extraction_settings()
    adapter = build_adapter(
        extraction.adapter,
        model=extraction.model,
        max_tokens=extraction.max_tokens,
        api_key=extraction.api_key,
        base_url=extraction.base_url,
        timeout_seconds=extraction.timeout_seconds,
    )
    return MenuIngestionService(
        item_validator=MenuItemValidator(default_currency=settings.default_currency),
        menu_extractor=StructuredMenuExtractor(
            adapter,
            prompt_builder=MenuExtractionPromptBuilder(default_currency=settings.default_currency),
            max_retries=extraction.max_retries,
            max_text_chars=extraction.max_text_chars,
        ),
        preview_limit=settings.preview_limit,
        sample_rows=settings.sample_rows,
        log_validation_errors=settings.log_validation_errors,
    )
