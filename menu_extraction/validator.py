"""Validation layer for raw extraction service output.

Parses the response text and checks it against the item output contract.
Every failure mode raises ExtractionSchemaViolation with its stage:

    json_parse      response is not JSON
    not_array       top-level JSON is not an array
    missing_fields  an item is not an object or lacks name/category
"""

import json
import re
from typing import Any, Dict, List

from app.domain.errors import ExtractionSchemaViolation
from menu_extraction.schema import ExtractedMenuItem

_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


def _strip_markdown_fences(text: str) -> str:
    """Remove markdown code fence markers wrapping JSON.

    LLMs sometimes wrap output in ```json ... ``` despite instructions.

    Args:
        text: Raw LLM response string.

    Returns:
        The text with every fence marker removed and surrounding whitespace trimmed.
    """
    return _FENCE_PATTERN.sub("", text).strip()


def _missing_required(item: Any) -> List[str]:
    if not isinstance(item, dict):
        return ["name", "category"]
    return [key for key in ("name", "category") if not item.get(key)]


def validate_extraction_output(raw_response: str) -> List[Dict[str, Any]]:
    """Parse and validate a raw extraction response string.

    Steps:
        1. Strip markdown fences.
        2. Parse as JSON.
        3. Require a top-level array.
        4. Require name and category on every item.
        5. Coerce each item to the canonical extraction shape.

    Args:
        raw_response: The raw string returned by the extraction adapter.

    Returns:
        Coerced item dicts with keys category, name, description, price, currency.

    Raises:
        ExtractionSchemaViolation: If any step fails.
    """
    cleaned = _strip_markdown_fences(raw_response or "")

    try:
        data = json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ExtractionSchemaViolation(
            stage="json_parse",
            errors=[f"Failed to parse response as JSON: {exc}"],
            raw_response=raw_response,
        ) from exc

    if not isinstance(data, list):
        raise ExtractionSchemaViolation(
            stage="not_array",
            errors=["Extraction service did not return an array of items"],
            raw_response=raw_response,
        )

    items: List[Dict[str, Any]] = []
    for index, item in enumerate(data):
        missing = _missing_required(item)
        if missing:
            raise ExtractionSchemaViolation(
                stage="missing_fields",
                errors=[
                    f"Item at index {index} missing required fields ({' or '.join(missing)})"
                ],
                raw_response=raw_response,
            )
        items.append(ExtractedMenuItem.model_validate(item).model_dump())

    return items
