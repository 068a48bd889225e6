"""
app/parsing/csv_parser.py

Decode uploaded CSV bytes into ordered raw rows.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass

from app.domain.errors import ParseFailureError
from app.domain.menu_item import RawRow


@dataclass(frozen=True)
class ParsedCSV:
    """
    Headers in file order plus every data row.
    """

    headers: tuple[str, ...]
    rows: tuple[RawRow, ...]


def parse_csv(content: bytes) -> ParsedCSV:
    """
    Parse a CSV buffer. Data rows get 1-based ordinals; blank lines are skipped.

    Raises:
        ParseFailureError: when the buffer is not UTF-8, is malformed, or
            holds no data rows.
    """

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseFailureError("Failed to parse CSV file: CSV must be UTF-8 encoded.") from exc

    reader = csv.DictReader(io.StringIO(text, newline=""), restval="")
    try:
        fieldnames = reader.fieldnames or []
        headers = tuple(header.strip() for header in fieldnames if header and header.strip())
        rows: list[RawRow] = []
        for ordinal, record in enumerate(reader, start=1):
            values = {
                header.strip(): (value.strip() if isinstance(value, str) else "")
                for header, value in record.items()
                if header is not None and header.strip()
            }
            rows.append(RawRow(ordinal=ordinal, values=values))
    except csv.Error as exc:
        raise ParseFailureError(f"Failed to parse CSV file: {exc}") from exc

    if not headers:
        raise ParseFailureError("Failed to parse CSV file: header row is missing.")
    if not rows:
        raise ParseFailureError("CSV file is empty")

    return ParsedCSV(headers=headers, rows=tuple(rows))
