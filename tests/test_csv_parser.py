from __future__ import annotations

import pytest

from app.domain.errors import ParseFailureError
from app.parsing.csv_parser import parse_csv


def test_parses_headers_and_numbered_rows() -> None:
    content = b"Dish,Cost,Cat\nKottu,1200,Mains\nTea,250,Beverages\n"

    parsed = parse_csv(content)

    assert parsed.headers == ("Dish", "Cost", "Cat")
    assert [row.ordinal for row in parsed.rows] == [1, 2]
    assert parsed.rows[0].values == {"Dish": "Kottu", "Cost": "1200", "Cat": "Mains"}


def test_strips_bom_and_header_whitespace() -> None:
    content = "\ufeff Name , Price \nTea,250\n".encode("utf-8")

    parsed = parse_csv(content)

    assert parsed.headers == ("Name", "Price")
    assert parsed.rows[0].values == {"Name": "Tea", "Price": "250"}


def test_cell_values_are_trimmed() -> None:
    content = b'Name,Price,Description\n  Tea ,  250 ," Hot, fresh "\n'

    parsed = parse_csv(content)

    assert parsed.rows[0].values == {"Name": "Tea", "Price": "250", "Description": "Hot, fresh"}


def test_short_rows_are_padded_and_quoted_commas_kept() -> None:
    content = b'Name,Description,Price\nTea,"Hot, fresh"\n'

    parsed = parse_csv(content)

    assert parsed.rows[0].values == {"Name": "Tea", "Description": "Hot, fresh", "Price": ""}


def test_header_only_file_is_empty() -> None:
    with pytest.raises(ParseFailureError, match="CSV file is empty"):
        parse_csv(b"Name,Price\n")


def test_blank_file_has_no_header() -> None:
    with pytest.raises(ParseFailureError, match="header row is missing"):
        parse_csv(b"")


def test_non_utf8_content_is_rejected() -> None:
    with pytest.raises(ParseFailureError):
        parse_csv("Name,Price\nCafé,250\n".encode("utf-16"))
