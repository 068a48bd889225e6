"""
app/mappers/column_mapper.py

Column mapping engine for vendor CSV headers -> canonical menu fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from app.domain.menu_item import MappedRow, RawRow
from app.mappers.synonyms import (
    DEFAULT_SYNONYMS,
    REQUIRED_CANONICAL_FIELDS,
    SynonymDictionary,
    normalize_header,
)


@dataclass(frozen=True)
class ColumnSuggestion:
    """
    Advisory canonical fields for one unmapped source column.
    """

    column: str
    suggested_fields: tuple[str, ...]


@dataclass(frozen=True)
class MappingResult:
    """
    Resolved column mapping plus advisory diagnostics.

    ``mapping`` is keyed by normalized source header.
    """

    mapping: Mapping[str, str]
    unmapped_columns: tuple[str, ...]
    missing_required: tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        return not self.missing_required


class ColumnMapper:
    """
    Resolves source CSV headers into canonical field mappings.
    """

    def __init__(
        self,
        *,
        synonyms: SynonymDictionary | None = None,
        required_fields: Sequence[str] = REQUIRED_CANONICAL_FIELDS,
    ) -> None:
        self._synonyms = synonyms or DEFAULT_SYNONYMS
        self._required_fields = tuple(required_fields)

    @property
    def canonical_fields(self) -> tuple[str, ...]:
        return self._synonyms.fields

    def create_mapping(
        self,
        headers: Sequence[str],
        overrides: Mapping[str, str] | None = None,
    ) -> MappingResult:
        """
        Resolve normalized-header -> canonical-field mapping.

        Operator overrides are registered first and are never displaced by
        dictionary detection. Missing required fields are reported, not raised.
        """

        mapping: dict[str, str] = {}
        for raw_header, canonical_field in (overrides or {}).items():
            mapping[normalize_header(raw_header)] = canonical_field

        unmapped: list[str] = []
        for header in headers:
            normalized = normalize_header(header)
            if normalized in mapping:
                continue

            canonical_field = self._synonyms.lookup(normalized)
            if canonical_field is None:
                unmapped.append(header)
                continue
            mapping[normalized] = canonical_field

        mapped_fields = set(mapping.values())
        missing = tuple(field for field in self._required_fields if field not in mapped_fields)

        return MappingResult(
            mapping=MappingProxyType(mapping),
            unmapped_columns=tuple(unmapped),
            missing_required=missing,
        )

    @staticmethod
    def transform_row(row: RawRow, mapping: Mapping[str, str]) -> MappedRow:
        """
        Map one source row into canonical raw field values.

        Headers absent from the mapping are dropped; they were already
        reported as unmapped.
        """

        fields: dict[str, str] = {}
        for raw_header, value in row.values.items():
            canonical_field = mapping.get(normalize_header(raw_header))
            if canonical_field:
                fields[canonical_field] = value
        return MappedRow(ordinal=row.ordinal, fields=fields)

    def suggest(self, unmapped_columns: Sequence[str]) -> list[ColumnSuggestion]:
        """
        Suggest canonical fields for unmapped columns by substring containment.
        """

        suggestions: list[ColumnSuggestion] = []
        for column in unmapped_columns:
            normalized = normalize_header(column)
            if not normalized:
                continue
            matches = tuple(
                field
                for field in self.canonical_fields
                if normalized in field or field in normalized
            )
            if matches:
                suggestions.append(ColumnSuggestion(column=column, suggested_fields=matches))
        return suggestions
