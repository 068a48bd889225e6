"""
app/mappers package marker.
"""

from app.mappers.column_mapper import ColumnMapper, ColumnSuggestion, MappingResult
from app.mappers.synonyms import (
    CANONICAL_FIELDS,
    DEFAULT_SYNONYMS,
    REQUIRED_CANONICAL_FIELDS,
    SynonymDictionary,
    normalize_header,
)

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_SYNONYMS",
    "REQUIRED_CANONICAL_FIELDS",
    "ColumnMapper",
    "ColumnSuggestion",
    "MappingResult",
    "SynonymDictionary",
    "normalize_header",
]
