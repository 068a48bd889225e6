"""
app/validators/menu_item_validator.py

Field-level validation and sanitizing shared by the CSV and PDF paths.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from app.domain.menu_item import DEFAULT_CURRENCY, CanonicalMenuItem, RowValidationError

TRUTHY_AVAILABILITY_VALUES = frozenset({"true", "1", "yes"})

# Leading number followed by whitespace or end of input: "100 LKR" reads as
# 100, while "1,200" and "1_000" are rejected rather than truncated.
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)(?:\s|$)")


@dataclass(frozen=True)
class MenuItemValidation:
    """
    Outcome of validating one mapped row or extracted item.

    ``sanitized_data`` only holds fields that sanitized successfully;
    ``item`` is set only when every field is valid.
    """

    ordinal: int
    sanitized_data: dict[str, Any]
    errors: tuple[RowValidationError, ...] = field(default_factory=tuple)
    item: CanonicalMenuItem | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]


class MenuItemValidator:
    """
    Validates and sanitizes canonical menu item values.
    """

    def __init__(self, *, default_currency: str = DEFAULT_CURRENCY) -> None:
        self._default_currency = default_currency

    def validate(
        self,
        item: Mapping[str, Any],
        ordinal: int,
        *,
        owner_id: str | None = None,
    ) -> MenuItemValidation:
        """
        Validate one item; errors accumulate across fields.
        """

        errors: list[RowValidationError] = []
        sanitized: dict[str, Any] = {}

        category = self._parse_string(item.get("category"))
        if category is None:
            errors.append(self._error(ordinal, "category", "Category is required"))
        else:
            sanitized["category"] = category

        name = self._parse_string(item.get("name"))
        if name is None:
            errors.append(self._error(ordinal, "name", "Name is required"))
        else:
            sanitized["name"] = name

        sanitized["description"] = self._parse_string(item.get("description")) or ""

        price = self._parse_price(item.get("price"))
        if price is None:
            errors.append(self._error(ordinal, "price", "Price must be a valid positive number"))
        else:
            sanitized["price"] = price

        currency = self._parse_string(item.get("currency"))
        sanitized["currency"] = currency.upper() if currency else self._default_currency

        sanitized["is_available"] = self._parse_availability(item)

        if errors:
            return MenuItemValidation(ordinal=ordinal, sanitized_data=sanitized, errors=tuple(errors))

        return MenuItemValidation(
            ordinal=ordinal,
            sanitized_data=sanitized,
            item=CanonicalMenuItem(owner_id=owner_id, **sanitized),
        )

    @staticmethod
    def _error(ordinal: int, column: str, message: str) -> RowValidationError:
        return RowValidationError(
            row_number=ordinal,
            column=column,
            message=f"Row {ordinal}: {message}",
        )

    def _parse_string(self, value: Any) -> str | None:
        if self._is_blank(value):
            return None
        return str(value).strip()

    @staticmethod
    def _parse_price(value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            price = float(value)
        else:
            match = _LEADING_NUMBER.match(str(value))
            if match is None:
                return None
            price = float(match.group(1))
        if not math.isfinite(price) or price < 0:
            return None
        return price

    @staticmethod
    def _parse_availability(item: Mapping[str, Any]) -> bool:
        """
        Missing or null means available; any present value is compared as text.
        """

        value = item.get("is_available")
        if value is None:
            return True
        return str(value).strip().lower() in TRUTHY_AVAILABILITY_VALUES

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""
