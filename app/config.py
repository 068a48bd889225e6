"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

_ALLOWED_EXTRACTION_ADAPTERS = {"openai", "mock"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(*names: str) -> str | None:
    """
    Return the first non-empty value among the given environment variables.
    """

    _load_env_once()
    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip():
            return value.strip()
    return None


@dataclass(frozen=True)
class MenuIngestionSettings:
    """
    Runtime settings for menu uploads.
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    preview_limit: int = 10
    sample_rows: int = 3
    default_currency: str = "LKR"
    log_validation_errors: bool = True


@dataclass(frozen=True)
class ExtractionSettings:
    """
    Structured extraction service settings.
    """

    adapter: str = "openai"
    model: str = "gpt-4o-mini"
    max_tokens: int = 8192
    api_key: str | None = None
    base_url: str | None = None
    timeout_seconds: float = 60.0
    max_retries: int = 0
    max_text_chars: int = 100_000


@lru_cache(maxsize=1)
def get_menu_ingestion_settings() -> MenuIngestionSettings:
    """
    Return cached menu ingestion settings from environment variables.
    """

    return MenuIngestionSettings(
        max_upload_bytes=max(1, _get_int_env("MENU_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
        preview_limit=max(1, _get_int_env("MENU_PREVIEW_LIMIT", 10)),
        sample_rows=max(1, _get_int_env("MENU_SAMPLE_ROWS", 3)),
        default_currency=_get_str_env("MENU_DEFAULT_CURRENCY", "LKR").upper(),
        log_validation_errors=_get_bool_env("MENU_LOG_VALIDATION_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_extraction_settings() -> ExtractionSettings:
    """
    Return cached extraction settings from environment variables.

    Raises RuntimeError if EXTRACTION_ADAPTER names an unknown adapter.
    """

    adapter = _get_str_env("EXTRACTION_ADAPTER", "openai").lower()
    if adapter not in _ALLOWED_EXTRACTION_ADAPTERS:
        raise RuntimeError(
            f"EXTRACTION_ADAPTER '{adapter}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_EXTRACTION_ADAPTERS)}."
        )

    return ExtractionSettings(
        adapter=adapter,
        model=_get_str_env("EXTRACTION_MODEL", "gpt-4o-mini"),
        max_tokens=max(256, _get_int_env("EXTRACTION_MAX_TOKENS", 8192)),
        api_key=_get_optional_str_env("EXTRACTION_API_KEY", "OPENAI_API_KEY"),
        base_url=_get_optional_str_env("EXTRACTION_BASE_URL"),
        timeout_seconds=max(1.0, _get_float_env("EXTRACTION_TIMEOUT_SECONDS", 60.0)),
        max_retries=max(0, _get_int_env("EXTRACTION_MAX_RETRIES", 0)),
        max_text_chars=max(1000, _get_int_env("EXTRACTION_MAX_TEXT_CHARS", 100_000)),
    )
