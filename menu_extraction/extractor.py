"""Structured extraction of menu items from document text."""

import logging

from app.domain.menu_item import ExtractionResult
from menu_extraction.adapter import BaseExtractionAdapter
from menu_extraction.prompt_builder import MenuExtractionPromptBuilder
from menu_extraction.retry import generate_with_retry

logger = logging.getLogger(__name__)


class StructuredMenuExtractor:
    """Turns unstructured menu text into raw canonical-shaped items.

    Performs one external call per request unless ``max_retries`` is raised.
    """

    def __init__(
        self,
        adapter: BaseExtractionAdapter,
        *,
        prompt_builder: MenuExtractionPromptBuilder | None = None,
        max_retries: int = 0,
        max_text_chars: int = 100_000,
    ) -> None:
        self._adapter = adapter
        self._prompt_builder = prompt_builder or MenuExtractionPromptBuilder()
        self._max_retries = max(0, max_retries)
        self._max_text_chars = max(1, max_text_chars)

    def extract_items(self, text: str, *, page_count: int = 1) -> ExtractionResult:
        """Prompt the extraction service and validate its response.

        Args:
            text: Document text; truncated to ``max_text_chars``.
            page_count: Page count of the source document, carried through.

        Returns:
            ExtractionResult with coerced items (possibly empty).

        Raises:
            ExtractionServiceFailure: If the service call errors.
            ExtractionSchemaViolation: If the response breaks the output contract.
        """
        if len(text) > self._max_text_chars:
            logger.warning(
                "Menu text truncated chars=%d limit=%d",
                len(text),
                self._max_text_chars,
            )
            text = text[: self._max_text_chars]

        prompt = self._prompt_builder.build_prompt(text)
        items = generate_with_retry(self._adapter, prompt, max_retries=self._max_retries)
        logger.info("Menu extraction completed items=%d pages=%d", len(items), page_count)
        return ExtractionResult(items=tuple(items), page_count=page_count)
