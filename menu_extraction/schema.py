"""Canonical shape of one item returned by the extraction service."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from app.domain.menu_item import DEFAULT_CURRENCY


class ExtractedMenuItem(BaseModel):
    """Coerced extraction item, handed to the shared item validator next."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    category: str
    name: str
    description: str = ""
    price: float = 0.0
    currency: str = DEFAULT_CURRENCY

    @field_validator("category", "name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            price = float(str(value).strip())
        except ValueError:
            return 0.0
        return price if math.isfinite(price) else 0.0

    @field_validator("currency", mode="before")
    @classmethod
    def _coerce_currency(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_CURRENCY
        return str(value).strip().upper()


ITEM_OUTPUT_FIELDS = tuple(ExtractedMenuItem.model_fields)
