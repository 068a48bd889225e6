"""
tests/test_menu_item_validator.py

Pytest unit tests for MenuItemValidator.

Coverage
--------
- Required fields and accumulated error messages
- Price boundaries (zero, negative, non-numeric, non-finite)
- Availability and currency defaults
- Owner attachment on valid items only
"""

from __future__ import annotations

import pytest

from app.validators.menu_item_validator import MenuItemValidator


@pytest.fixture()
def validator() -> MenuItemValidator:
    return MenuItemValidator()


def _item(**overrides: object) -> dict:
    item = {"category": "Mains", "name": "Chicken Kottu", "price": "1200"}
    item.update(overrides)
    return item


class TestRequiredFields:
    def test_valid_item_is_sanitized(self, validator: MenuItemValidator) -> None:
        result = validator.validate(
            _item(name="  Chicken Kottu ", description=" Spicy ", currency="usd"),
            1,
            owner_id="vendor-1",
        )

        assert result.is_valid
        assert result.item is not None
        assert result.item.name == "Chicken Kottu"
        assert result.item.description == "Spicy"
        assert result.item.price == 1200.0
        assert result.item.currency == "USD"
        assert result.item.is_available is True
        assert result.item.owner_id == "vendor-1"

    def test_blank_category_is_rejected(self, validator: MenuItemValidator) -> None:
        result = validator.validate(_item(category="   "), 3)

        assert not result.is_valid
        assert result.item is None
        assert result.messages == ["Row 3: Category is required"]

    def test_missing_name_is_rejected(self, validator: MenuItemValidator) -> None:
        item = _item()
        del item["name"]

        result = validator.validate(item, 2)

        assert result.messages == ["Row 2: Name is required"]

    def test_errors_accumulate_in_field_order(self, validator: MenuItemValidator) -> None:
        result = validator.validate({"category": "", "name": None, "price": "free"}, 7)

        assert result.messages == [
            "Row 7: Category is required",
            "Row 7: Name is required",
            "Row 7: Price must be a valid positive number",
        ]
        assert [error.column for error in result.errors] == ["category", "name", "price"]
        assert all(error.row_number == 7 for error in result.errors)


class TestPriceBoundaries:
    @pytest.mark.parametrize("price", ["0", 0, "0.00", " 12.50 ", 99.9, "1e3"])
    def test_non_negative_numbers_are_accepted(self, validator: MenuItemValidator, price: object) -> None:
        result = validator.validate(_item(price=price), 1)

        assert result.is_valid
        assert result.item is not None
        assert result.item.price == float(str(price).strip())

    @pytest.mark.parametrize(("price", "expected"), [("100 LKR", 100.0), ("250.50 per cup", 250.5), (".5 ", 0.5)])
    def test_leading_number_is_read(self, validator: MenuItemValidator, price: str, expected: float) -> None:
        result = validator.validate(_item(price=price), 1)

        assert result.item is not None
        assert result.item.price == expected

    @pytest.mark.parametrize(
        "price",
        ["-0.01", -5, "abc", "", None, "nan", "inf", "1,200", "1_000", "Rs. 100", "12abc", "1e999", True],
    )
    def test_invalid_prices_are_rejected(self, validator: MenuItemValidator, price: object) -> None:
        result = validator.validate(_item(price=price), 1)

        assert not result.is_valid
        assert result.messages == ["Row 1: Price must be a valid positive number"]
        assert "price" not in result.sanitized_data


class TestDefaults:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("TRUE", True),
            ("1", True),
            ("yes", True),
            ("YES", True),
            ("", False),
            ("  ", False),
            (None, True),
            ("false", False),
            ("no", False),
            ("0", False),
            ("sold out", False),
        ],
    )
    def test_availability(self, validator: MenuItemValidator, raw: object, expected: bool) -> None:
        result = validator.validate(_item(is_available=raw), 1)

        assert result.item is not None
        assert result.item.is_available is expected

    def test_blank_currency_uses_default(self) -> None:
        result = MenuItemValidator(default_currency="USD").validate(_item(currency="  "), 1)

        assert result.item is not None
        assert result.item.currency == "USD"

    def test_missing_description_becomes_empty_string(self, validator: MenuItemValidator) -> None:
        result = validator.validate(_item(), 1)

        assert result.item is not None
        assert result.item.description == ""

    def test_validation_is_stateless(self, validator: MenuItemValidator) -> None:
        first = validator.validate(_item(), 1, owner_id="a")
        second = validator.validate(_item(), 1, owner_id="a")

        assert first == second
