"""Retry logic for extraction response formatting errors.

Retries only on JSON parse or array-shape failures, and only when
``max_retries`` is raised above its default of zero. Transport errors
from the adapter are never retried.
"""

import logging
from typing import Any, Dict, List

from app.domain.errors import ExtractionSchemaViolation
from menu_extraction.adapter import BaseExtractionAdapter
from menu_extraction.validator import validate_extraction_output

logger = logging.getLogger(__name__)

_RETRYABLE_STAGES = frozenset({"json_parse", "not_array"})


def generate_with_retry(
    adapter: BaseExtractionAdapter,
    prompt: str,
    max_retries: int = 0,
) -> List[Dict[str, Any]]:
    """Generate extraction output, retrying on formatting errors.

    Args:
        adapter: An adapter implementing ``generate(prompt) -> str``.
        prompt: The fully formatted prompt string.
        max_retries: Additional attempts after the first failure.
            Total attempts = 1 + max_retries.

    Returns:
        Validated, coerced item dicts.

    Raises:
        ExtractionServiceFailure: If the adapter call errors.
        ExtractionSchemaViolation: If the final attempt still fails validation,
            or a non-retryable stage fails.
    """
    total_attempts = 1 + max(0, max_retries)

    for attempt in range(1, total_attempts):
        raw = adapter.generate(prompt)
        try:
            return validate_extraction_output(raw)
        except ExtractionSchemaViolation as exc:
            if exc.stage not in _RETRYABLE_STAGES:
                raise
            logger.warning(
                "Extraction attempt %d/%d failed at stage '%s': %s",
                attempt,
                total_attempts,
                exc.stage,
                "; ".join(exc.errors),
            )

    return validate_extraction_output(adapter.generate(prompt))
