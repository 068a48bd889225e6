from __future__ import annotations

import pytest

from app.mappers.synonyms import DEFAULT_SYNONYMS, SynonymDictionary, normalize_header


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Price", "price"),
        ("  Item Name  ", "item_name"),
        ("Unit-Price", "unit_price"),
        ("unit__price", "unit_price"),
        ("Unit - Price ($)", "unit_price"),
        ("__Menu Category__", "menu_category"),
        ("In Stock?", "in_stock"),
        ("", ""),
        ("$$$", ""),
    ],
)
def test_normalize_header(header: str, expected: str) -> None:
    assert normalize_header(header) == expected


@pytest.mark.parametrize(
    "header",
    ["Item Name", " - Price_ ", "a -_ b", "Dish (veg) #1", "_x_", "CURRENCY code", "é-price", "--"],
)
def test_normalize_header_is_idempotent(header: str) -> None:
    once = normalize_header(header)
    assert normalize_header(once) == once


def test_default_synonyms_resolve_normalized_headers() -> None:
    assert DEFAULT_SYNONYMS.lookup("dish") == "name"
    assert DEFAULT_SYNONYMS.lookup("cost") == "price"
    assert DEFAULT_SYNONYMS.lookup("cat") == "category"
    assert DEFAULT_SYNONYMS.lookup("in_stock") == "is_available"
    assert DEFAULT_SYNONYMS.lookup("notes") is None


def test_first_declared_field_wins_on_collision() -> None:
    synonyms = SynonymDictionary.from_mapping(
        {
            "name": ["title", "label"],
            "category": ["label", "section"],
        }
    )

    assert synonyms.lookup("label") == "name"
    assert synonyms.fields == ("name", "category")


def test_synonym_dictionary_normalizes_its_own_entries() -> None:
    synonyms = SynonymDictionary.from_mapping({"price": ["Unit Price", "Cost (LKR)"]})

    assert synonyms.lookup("unit_price") == "price"
    assert synonyms.lookup("cost_lkr") == "price"


def test_synonym_dictionary_is_immutable() -> None:
    with pytest.raises(AttributeError):
        DEFAULT_SYNONYMS.entries = ()  # type: ignore[misc]
