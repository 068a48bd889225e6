"""Structured menu extraction from unstructured document text."""

import os

from menu_extraction.adapter import (
    BaseExtractionAdapter,
    MockExtractionAdapter,
    OpenAIExtractionAdapter,
)
from menu_extraction.extractor import StructuredMenuExtractor
from menu_extraction.prompt_builder import MenuExtractionPromptBuilder
from menu_extraction.validator import validate_extraction_output


def build_adapter(
    adapter_name: str = "openai",
    *,
    model: str = "gpt-4o-mini",
    max_tokens: int = 8192,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout_seconds: float = 60.0,
) -> BaseExtractionAdapter:
    """Instantiate the adapter selected by name.

    mock   -> MockExtractionAdapter  (testing, no API key required)
    openai -> OpenAIExtractionAdapter (default)
    """
    if adapter_name.strip().lower() == "mock":
        return MockExtractionAdapter()

    return OpenAIExtractionAdapter(
        model=model,
        max_tokens=max_tokens,
        api_key=api_key or os.getenv("OPENAI_API_KEY"),
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )


__all__ = [
    "BaseExtractionAdapter",
    "MenuExtractionPromptBuilder",
    "MockExtractionAdapter",
    "OpenAIExtractionAdapter",
    "StructuredMenuExtractor",
    "build_adapter",
    "validate_extraction_output",
]
