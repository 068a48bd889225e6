"""LLM adapters for structured menu extraction.

Provides a base interface and concrete adapters for OpenAI-compatible
APIs and a deterministic mock for testing.
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Optional

from openai import OpenAI, OpenAIError

from app.domain.errors import ExtractionServiceFailure


class BaseExtractionAdapter(ABC):
    """Abstract base for all extraction service adapters."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a prompt to the extraction service and return the raw text.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Raw string response from the model (expected to be a JSON array).

        Raises:
            ExtractionServiceFailure: If the service call errors.
        """


class OpenAIExtractionAdapter(BaseExtractionAdapter):
    """Adapter for OpenAI-compatible chat completion APIs.

    Any OpenAI-compatible endpoint works through ``base_url``, including
    hosted Gemini and local model servers.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        max_tokens: int = 8192,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialise the OpenAI adapter.

        Args:
            model: Model identifier.
            max_tokens: Maximum tokens in the completion.
            api_key: API key. Falls back to OPENAI_API_KEY env var.
            base_url: Optional base URL for OpenAI-compatible endpoints.
            timeout_seconds: Per-request timeout passed to the client.
        """
        resolved_key = api_key or os.environ.get("OPENAI_API_KEY", "")
        client_kwargs: dict = {"api_key": resolved_key, "timeout": timeout_seconds}
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        """Call the chat completion API once.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Raw string content from the model response.
        """
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
                max_tokens=self._max_tokens,
                stream=False,
            )
        except OpenAIError as exc:
            raise ExtractionServiceFailure(
                f"Failed to extract menu from PDF: {exc}"
            ) from exc
        return response.choices[0].message.content or ""


# ---------------------------------------------------------------------------
# Fixed mock response used for local testing.
# ---------------------------------------------------------------------------
_MOCK_RESPONSE = [
    {
        "category": "Beverages",
        "name": "Ceylon Tea",
        "description": "Freshly brewed black tea",
        "price": 250,
        "currency": "LKR",
    },
    {
        "category": "Mains",
        "name": "Chicken Kottu",
        "description": "",
        "price": 1200,
        "currency": "LKR",
    },
]

_MOCK_RESPONSE_JSON = json.dumps(_MOCK_RESPONSE, indent=2)


class MockExtractionAdapter(BaseExtractionAdapter):
    """Deterministic adapter that returns a fixed JSON array.

    Used for local testing and CI pipelines where no LLM API
    is available.
    """

    def __init__(self, response: str = _MOCK_RESPONSE_JSON) -> None:
        self._response = response
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        """Record the prompt and return the configured response.

        Args:
            prompt: Recorded for inspection; does not affect the output.

        Returns:
            The configured response text.
        """
        self.prompts.append(prompt)
        return self._response
