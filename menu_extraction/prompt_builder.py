"""Structured prompt builder for menu extraction."""

import json

_EXAMPLE_OUTPUT = json.dumps(
    [
        {
            "category": "Appetizers",
            "name": "Vegetable Spring Rolls",
            "description": "Crispy rolls with sweet chilli dip",
            "price": 850,
            "currency": "LKR",
        },
        {
            "category": "Beverages",
            "name": "Iced Coffee (Large)",
            "description": "",
            "price": 4.5,
            "currency": "USD",
        },
    ],
    indent=2,
)

_SYSTEM_INSTRUCTIONS = """\
You are a menu data extraction expert. Extract ALL menu items from the
restaurant menu text below.

INSTRUCTIONS:
1. Extract every menu item you can find.
2. Identify the category for each item (e.g., Appetizers, Main Courses, Desserts, Beverages).
3. Extract item name, description, price, and currency.
4. If no description is provided, leave it empty.
5. If multiple prices exist for one item (e.g., different sizes), create separate entries.
6. Normalize currency symbols to ISO codes (e.g., Rs, රු -> LKR, $ -> USD, € -> EUR).
7. Convert prices to numbers: remove currency symbols and thousands separators.
"""

_OUTPUT_CONTRACT = """\
REQUIRED OUTPUT FORMAT (JSON array):
[
  {
    "category": "string (e.g., Appetizers, Main Course)",
    "name": "string (item name)",
    "description": "string (optional, can be empty)",
    "price": number (numeric value only),
    "currency": "string (ISO code: LKR, USD, EUR, etc.)"
  }
]

IMPORTANT:
- Return ONLY a valid JSON array, no additional text.
- Do NOT wrap the JSON in markdown code fences.
- Ensure all prices are positive numbers.
- Use "{default_currency}" as the currency when none is specified.
- Group items by category logically.
- If you cannot extract menu data, return an empty array [] instead of guessing.
"""


class MenuExtractionPromptBuilder:
    """Builds the single extraction prompt sent for one document."""

    def __init__(self, default_currency: str = "LKR") -> None:
        self._default_currency = default_currency

    def build_prompt(self, menu_text: str) -> str:
        """Build the full extraction prompt around the document text.

        Args:
            menu_text: Text extracted from the uploaded document.

        Returns:
            A fully formatted prompt string ready for LLM consumption.
        """
        contract = _OUTPUT_CONTRACT.replace("{default_currency}", self._default_currency)
        return (
            f"{_SYSTEM_INSTRUCTIONS}\n"
            f"MENU TEXT:\n\"\"\"\n{menu_text.strip()}\n\"\"\"\n\n"
            f"{contract}\n"
            f"EXAMPLE OUTPUT:\n{_EXAMPLE_OUTPUT}\n\n"
            f"Extract the menu items now:"
        )
