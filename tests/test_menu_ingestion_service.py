"""
tests/test_menu_ingestion_service.py

Pytest tests for MenuIngestionService.

All tests run against in-memory doubles; no database, no network.

Coverage
--------
- CSV analysis, upload, preview, mapping rejections
- PDF extraction, preview default, blank and empty documents
- Operator-reviewed saves
- Partial persistence reporting
"""

from __future__ import annotations

import json

import pytest

from app.domain.errors import (
    EmptyOrImageOnlyDocumentError,
    InvalidMappingFormatError,
    MappingIncompleteError,
    NoMenuItemsExtractedError,
    NoValidItemsError,
    ParseFailureError,
)
from app.services.menu_ingestion_service import MenuIngestionService
from menu_extraction import MockExtractionAdapter, StructuredMenuExtractor
from tests.fakes import InMemoryMenuStore, StaticTextExtractor

VENDOR_CSV = (
    b"Dish,Cost,Cat,Notes\n"
    b"Chicken Kottu,1200,Mains,spicy\n"
    b"Ceylon Tea,250,Beverages,\n"
    b",300,Mains,nameless\n"
    b"Egg Hopper,abc,Mains,\n"
)


def _service(*, extractor_response: str | None = None, text: str = "Ceylon Tea 250", **kwargs) -> MenuIngestionService:
    adapter = MockExtractionAdapter() if extractor_response is None else MockExtractionAdapter(extractor_response)
    return MenuIngestionService(
        text_extractor=StaticTextExtractor(text, page_count=2),
        menu_extractor=StructuredMenuExtractor(adapter),
        **kwargs,
    )


@pytest.fixture()
def service() -> MenuIngestionService:
    return _service()


# ---------------------------------------------------------------------------
# CSV analysis
# ---------------------------------------------------------------------------


def test_analyze_reports_mapping_and_samples(service: MenuIngestionService) -> None:
    analysis = service.analyze_csv(VENDOR_CSV)

    assert analysis.total_rows == 4
    assert analysis.detected_columns == ("Dish", "Cost", "Cat", "Notes")
    assert analysis.auto_mapping == {"dish": "name", "cost": "price", "cat": "category"}
    assert analysis.unmapped_columns == ("Notes",)
    assert analysis.missing_required == ()
    assert analysis.ready_to_upload
    assert len(analysis.sample_data) == 3
    assert analysis.sample_data[0]["Dish"] == "Chicken Kottu"


def test_dish_cost_cat_scenario(service: MenuIngestionService) -> None:
    content = b"Dish,Cost,Cat\nTea,100,Beverages\n"

    assert service.analyze_csv(content).missing_required == ()
    report = service.ingest_csv(content=content, owner_id="vendor-1", preview=True)

    assert report.preview_data is not None
    assert report.preview_data[0].to_dict() == {
        "category": "Beverages",
        "name": "Tea",
        "description": "",
        "price": 100.0,
        "currency": "LKR",
        "is_available": True,
        "ownerId": "vendor-1",
    }


def test_blank_availability_cell_marks_item_unavailable(service: MenuIngestionService) -> None:
    content = b"name,category,price,available\nTea,Bev,100,\nCoffee,Bev,150 LKR,yes\n"

    report = service.ingest_csv(content=content, owner_id="vendor-1", preview=True)

    assert report.preview_data is not None
    assert [(item.name, item.price, item.is_available) for item in report.preview_data] == [
        ("Tea", 100.0, False),
        ("Coffee", 150.0, True),
    ]


def test_analyze_flags_missing_price(service: MenuIngestionService) -> None:
    analysis = service.analyze_csv(b"Item Name,Category,Item Price\nTea,Beverages,250\n")

    assert analysis.missing_required == ("price",)
    assert not analysis.ready_to_upload
    assert [s.column for s in analysis.suggestions] == ["Item Price"]


# ---------------------------------------------------------------------------
# CSV ingestion
# ---------------------------------------------------------------------------


def test_csv_upload_skips_invalid_rows(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    report = service.ingest_csv(content=VENDOR_CSV, owner_id="vendor-1", store=store)

    assert report.total == 4
    assert report.valid_count == 2
    assert report.skipped_count == 2
    assert report.saved_count == 2
    assert report.preview_data is None
    assert [error.message for error in report.errors] == [
        "Row 3: Name is required",
        "Row 4: Price must be a valid positive number",
    ]
    assert [item.name for item in store.saved] == ["Chicken Kottu", "Ceylon Tea"]
    assert all(item.owner_id == "vendor-1" for item in store.saved)
    assert report.applied_mapping == {"dish": "name", "cost": "price", "cat": "category"}
    assert report.unmapped_columns == ("Notes",)


def test_csv_preview_never_writes_and_is_repeatable(
    service: MenuIngestionService,
    store: InMemoryMenuStore,
) -> None:
    first = service.ingest_csv(content=VENDOR_CSV, owner_id="vendor-1", preview=True, store=store)
    second = service.ingest_csv(content=VENDOR_CSV, owner_id="vendor-1", preview=True, store=store)

    assert store.calls == 0
    assert store.saved == []
    assert first.saved_count == 0
    assert first.preview_data == second.preview_data
    assert [item.name for item in first.preview_data or ()] == ["Chicken Kottu", "Ceylon Tea"]


def test_csv_preview_needs_no_store(service: MenuIngestionService) -> None:
    report = service.ingest_csv(content=VENDOR_CSV, owner_id="vendor-1", preview=True)

    assert report.valid_count == 2


def test_preview_data_is_capped() -> None:
    rows = "".join(f"Item {n},{n},Mains\n" for n in range(1, 16))
    service = _service(preview_limit=10)

    report = service.ingest_csv(
        content=("Name,Price,Category\n" + rows).encode(),
        owner_id="vendor-1",
        preview=True,
    )

    assert report.valid_count == 15
    assert len(report.preview_data or ()) == 10


def test_override_redirects_a_column(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    content = b"Item,Title,Price,Category\nHouse special,Fried Rice,900,Mains\n"

    report = service.ingest_csv(
        content=content,
        owner_id="vendor-1",
        raw_mapping=json.dumps({"Item": "description"}),
        store=store,
    )

    assert report.saved_count == 1
    assert store.saved[0].name == "Fried Rice"
    assert store.saved[0].description == "House special"


def test_missing_price_aborts_before_any_row(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    with pytest.raises(MappingIncompleteError) as exc_info:
        service.ingest_csv(
            content=b"Item Name,Category\nTea,Beverages\n",
            owner_id="vendor-1",
            store=store,
        )

    assert exc_info.value.missing_required == ("price",)
    assert store.calls == 0


def test_bad_mapping_is_rejected_before_parsing(service: MenuIngestionService) -> None:
    with pytest.raises(InvalidMappingFormatError):
        service.ingest_csv(content=b"\xff\xfe", owner_id="vendor-1", raw_mapping="[1, 2]", preview=True)


def test_unparseable_csv_is_rejected(service: MenuIngestionService) -> None:
    with pytest.raises(ParseFailureError):
        service.ingest_csv(content=b"Name,Price\n", owner_id="vendor-1", preview=True)


def test_csv_with_no_valid_rows_saves_nothing(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    report = service.ingest_csv(
        content=b"Name,Price,Category\n,1,Mains\nTea,-1,Beverages\n",
        owner_id="vendor-1",
        store=store,
    )

    assert report.saved_count == 0
    assert report.skipped_count == 2
    assert store.calls == 0


def test_store_rejection_is_reported_against_source_row() -> None:
    service = _service()
    store = InMemoryMenuStore(reject_names=["Ceylon Tea"])

    report = service.ingest_csv(content=VENDOR_CSV, owner_id="vendor-1", store=store)

    assert report.saved_count == 1
    assert report.failures[0].item.name == "Ceylon Tea"
    assert report.errors[-1].row_number == 2
    assert report.errors[-1].message == (
        "Database error on item 'Ceylon Tea': value too long for type"
    )


# ---------------------------------------------------------------------------
# PDF ingestion
# ---------------------------------------------------------------------------


def test_pdf_defaults_to_preview(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    report = service.ingest_pdf(content=b"%PDF-1.7", owner_id="vendor-1", store=store)

    assert report.preview
    assert report.total == 2
    assert report.page_count == 2
    assert [item.name for item in report.preview_data or ()] == ["Ceylon Tea", "Chicken Kottu"]
    assert store.calls == 0


def test_pdf_save_persists_items(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    report = service.ingest_pdf(content=b"%PDF-1.7", owner_id="vendor-1", preview=False, store=store)

    assert report.saved_count == 2
    assert {item.currency for item in store.saved} == {"LKR"}


def test_blank_document_is_rejected() -> None:
    service = _service(text="  \n ")

    with pytest.raises(EmptyOrImageOnlyDocumentError) as exc_info:
        service.ingest_pdf(content=b"%PDF-1.7", owner_id="vendor-1")

    assert "OCR" in exc_info.value.message


def test_empty_extraction_is_rejected() -> None:
    service = _service(extractor_response="[]")

    with pytest.raises(NoMenuItemsExtractedError) as exc_info:
        service.ingest_pdf(content=b"%PDF-1.7", owner_id="vendor-1")

    assert exc_info.value.to_dict()["totalItems"] == 0


def test_pdf_save_without_valid_items_is_rejected(store: InMemoryMenuStore) -> None:
    service = _service(extractor_response='[{"category": "Mains", "name": "Rice", "price": -5}]')

    with pytest.raises(NoValidItemsError) as exc_info:
        service.ingest_pdf(content=b"%PDF-1.7", owner_id="vendor-1", preview=False, store=store)

    assert exc_info.value.to_dict()["errors"] == [
        {"row": 1, "message": "Row 1: Price must be a valid positive number"}
    ]
    assert store.calls == 0


# ---------------------------------------------------------------------------
# Reviewed items
# ---------------------------------------------------------------------------


def test_save_items_validates_each_item(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    report = service.save_items(
        items=[
            {"category": "Mains", "name": "Rice", "price": 450},
            {"category": "Mains", "name": "", "price": 450},
        ],
        owner_id="vendor-1",
        store=store,
    )

    assert report.saved_count == 1
    assert report.skipped_count == 1
    assert report.errors[0].message == "Row 2: Name is required"


def test_duplicate_save_is_a_partial_failure(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    items = [{"category": "Mains", "name": "Rice", "price": 450}]
    service.save_items(items=items, owner_id="vendor-1", store=store)

    report = service.save_items(items=items, owner_id="vendor-1", store=store)

    assert report.saved_count == 0
    assert report.failures[0].reason == "duplicate key value"


def test_save_items_requires_a_valid_item(service: MenuIngestionService, store: InMemoryMenuStore) -> None:
    with pytest.raises(NoValidItemsError):
        service.save_items(items=[], owner_id="vendor-1", store=store)
