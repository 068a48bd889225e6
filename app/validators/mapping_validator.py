"""
app/validators/mapping_validator.py

Validation for operator-supplied column mappings and resolved mappings.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from app.domain.errors import InvalidMappingFormatError, MappingIncompleteError
from app.mappers.column_mapper import ColumnMapper, MappingResult
from app.mappers.synonyms import CANONICAL_FIELDS

_INVALID_MAPPING_MESSAGE = "Invalid mapping format. Expected JSON object."


class MappingValidator:
    """
    Validates operator overrides and resolved canonical mappings.
    """

    def __init__(self, *, canonical_fields: Sequence[str] = CANONICAL_FIELDS) -> None:
        self._canonical_fields = tuple(canonical_fields)

    def parse_overrides(self, raw_mapping: str | Mapping[str, Any] | None) -> dict[str, str]:
        """
        Parse a raw header -> canonical field mapping from a JSON string or object.
        """

        if raw_mapping is None:
            return {}

        if isinstance(raw_mapping, str):
            if not raw_mapping.strip():
                return {}
            try:
                parsed = json.loads(raw_mapping)
            except json.JSONDecodeError as exc:
                raise InvalidMappingFormatError(_INVALID_MAPPING_MESSAGE) from exc
        else:
            parsed = raw_mapping

        if not isinstance(parsed, Mapping):
            raise InvalidMappingFormatError(_INVALID_MAPPING_MESSAGE)

        overrides: dict[str, str] = {}
        for header, canonical_field in parsed.items():
            if not isinstance(header, str) or not isinstance(canonical_field, str):
                raise InvalidMappingFormatError(
                    "Invalid mapping format. Keys and values must be strings."
                )
            target = canonical_field.strip()
            if target not in self._canonical_fields:
                allowed = ", ".join(self._canonical_fields)
                raise InvalidMappingFormatError(
                    f"Invalid mapping target '{canonical_field}' for column '{header}'. "
                    f"Allowed fields: {allowed}."
                )
            overrides[header] = target
        return overrides

    @staticmethod
    def ensure_complete(result: MappingResult, mapper: ColumnMapper) -> None:
        """
        Raise MappingIncompleteError when required fields are unresolved.
        """

        if result.is_complete:
            return
        raise MappingIncompleteError(
            missing_required=result.missing_required,
            unmapped_columns=result.unmapped_columns,
            suggestions=mapper.suggest(result.unmapped_columns),
        )
