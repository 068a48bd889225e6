from __future__ import annotations

import unittest

from app.domain.errors import InvalidMappingFormatError, MappingIncompleteError
from app.mappers.column_mapper import ColumnMapper
from app.validators.mapping_validator import MappingValidator


class TestMappingValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = ColumnMapper()
        self.validator = MappingValidator(canonical_fields=self.mapper.canonical_fields)

    def test_parses_json_object(self) -> None:
        overrides = self.validator.parse_overrides('{"Item": "description", "Dish": " name "}')

        self.assertEqual(overrides, {"Item": "description", "Dish": "name"})

    def test_accepts_mapping_objects_and_blank_input(self) -> None:
        self.assertEqual(self.validator.parse_overrides({"Cost": "price"}), {"Cost": "price"})
        self.assertEqual(self.validator.parse_overrides(None), {})
        self.assertEqual(self.validator.parse_overrides("   "), {})

    def test_rejects_non_json(self) -> None:
        with self.assertRaises(InvalidMappingFormatError) as ctx:
            self.validator.parse_overrides("{not json")

        self.assertEqual(ctx.exception.message, "Invalid mapping format. Expected JSON object.")
        self.assertEqual(ctx.exception.to_dict()["code"], "invalid_mapping_format")

    def test_rejects_json_that_is_not_an_object(self) -> None:
        with self.assertRaises(InvalidMappingFormatError):
            self.validator.parse_overrides('["name", "price"]')

    def test_rejects_non_string_entries(self) -> None:
        with self.assertRaises(InvalidMappingFormatError):
            self.validator.parse_overrides('{"Cost": 3}')

    def test_rejects_unknown_canonical_field(self) -> None:
        with self.assertRaises(InvalidMappingFormatError) as ctx:
            self.validator.parse_overrides('{"Cost": "cost_price"}')

        self.assertIn("cost_price", ctx.exception.message)

    def test_ensure_complete_passes_complete_mapping(self) -> None:
        result = self.mapper.create_mapping(["Name", "Price", "Category"])

        self.validator.ensure_complete(result, self.mapper)

    def test_ensure_complete_raises_with_diagnostics(self) -> None:
        result = self.mapper.create_mapping(["Item Name", "Category", "Item Price"])

        with self.assertRaises(MappingIncompleteError) as ctx:
            self.validator.ensure_complete(result, self.mapper)

        payload = ctx.exception.to_dict()
        self.assertEqual(payload["missingFields"], ["price"])
        self.assertEqual(payload["unmappedColumns"], ["Item Price"])
        self.assertEqual(
            payload["suggestions"],
            [{"column": "Item Price", "suggestedFields": ["price"]}],
        )
        self.assertIn("mapping", payload["hint"])


if __name__ == "__main__":
    unittest.main()
