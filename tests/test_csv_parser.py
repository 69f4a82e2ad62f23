"""Tests for CSV parsing."""

from decimal import Decimal

import pytest

from cofi.domain.csv_import import parse_csv, parse_csv_rows, read_header, split_csv_line
from cofi.domain.errors import ValidationError

HEADER = "description,category,amount,date,is_public"


def test_parse_single_row():
    result = parse_csv(f"{HEADER}\nCoffee,Food,-4.50,2024-03-01,true\n")

    assert result.success
    assert result.errors == ()
    assert len(result.transactions) == 1
    row = result.transactions[0]
    assert row.row_num == 2
    assert row.description == "Coffee"
    assert row.category == "Food"
    assert row.amount == Decimal("-4.50")
    assert row.date == "2024-03-01"
    assert row.is_public is True


def test_columns_in_any_order_with_extras():
    content = "date,notes,amount,is_public,category,description\n2024-03-01,x,12,false,Fuel,Gas\n"
    result = parse_csv(content)

    assert result.success
    row = result.transactions[0]
    assert row.description == "Gas"
    assert row.category == "Fuel"
    assert row.amount == Decimal("12")
    assert row.is_public is False


def test_missing_headers():
    result = parse_csv("description,category,amount\nCoffee,Food,-4.50\n")

    assert not result.success
    assert result.transactions == ()
    assert result.errors == ("Missing required headers: date, is_public",)


def test_missing_headers_raise_from_strict_parser():
    with pytest.raises(ValidationError, match="Missing required headers"):
        parse_csv_rows("description,amount\n")


@pytest.mark.parametrize("content", ["", "   \n\n", "\ufeff"])
def test_empty_input(content):
    result = parse_csv(content)
    assert not result.success
    assert result.errors == ("CSV file is empty",)


def test_byte_order_mark_is_ignored():
    result = parse_csv(f"\ufeff{HEADER}\nCoffee,Food,-4.50,2024-03-01,true\n")
    assert result.success
    assert len(result.transactions) == 1


def test_quoted_fields():
    content = f'{HEADER}\n"Dinner, with friends","Food","-45.00","2024-03-02",TRUE\n'
    result = parse_csv(content)

    assert result.success
    assert result.transactions[0].description == "Dinner, with friends"
    assert result.transactions[0].is_public is True


def test_doubled_quotes():
    assert split_csv_line('"He said ""hi""",b') == ['He said "hi"', "b"]


def test_split_empty_line():
    assert split_csv_line("") == []


@pytest.mark.parametrize(
    "token,expected",
    [("true", True), ("TRUE", True), ("1", True), ("false", False), ("0", False), ("yes", False), ("", False)],
)
def test_is_public_tokens(token, expected):
    result = parse_csv(f"{HEADER}\nCoffee,Food,-4.50,2024-03-01,{token}\n")
    assert result.success
    assert result.transactions[0].is_public is expected


def test_insufficient_columns():
    result = parse_csv(f"{HEADER}\nCoffee,Food,-4.50\n")
    assert result.errors == ("Row 2: Insufficient columns",)


@pytest.mark.parametrize(
    "line,message",
    [
        (",Food,-4.50,2024-03-01,true", "Row 2: Description is required"),
        ("Coffee,,-4.50,2024-03-01,true", "Row 2: Category is required"),
        ("Coffee,Food,,2024-03-01,true", "Row 2: Amount is required"),
        ("Coffee,Food,-4.50,,true", "Row 2: Date is required"),
        ("Coffee,Food,abc,2024-03-01,true", 'Row 2: Invalid amount "abc"'),
        ("Coffee,Food,-4.50,03/01/2024,true", 'Row 2: Invalid date format "03/01/2024". Use YYYY-MM-DD'),
    ],
)
def test_row_errors(line, message):
    result = parse_csv(f"{HEADER}\n{line}\n")
    assert not result.success
    assert result.errors == (message,)


def test_partial_results_keep_valid_rows():
    content = (
        f"{HEADER}\n"
        "Coffee,Food,-4.50,2024-03-01,true\n"
        "Broken,Food,xyz,2024-03-01,true\n"
        "\n"
        "Salary,Income,2000,2024-03-25,false\n"
        "Late,Food,-1,2024/03/30,false\n"
    )
    result = parse_csv(content)

    assert not result.success
    assert [row.description for row in result.transactions] == ["Coffee", "Salary"]
    assert [row.row_num for row in result.transactions] == [2, 5]
    assert result.errors == (
        'Row 3: Invalid amount "xyz"',
        'Row 6: Invalid date format "2024/03/30". Use YYYY-MM-DD',
    )


def test_impossible_calendar_date_passes_shape_check():
    result = parse_csv(f"{HEADER}\nOdd,Food,-1,2024-13-40,true\n")
    assert result.success
    assert result.transactions[0].date == "2024-13-40"


def test_currency_and_parentheses_amounts():
    content = f'{HEADER}\nA,Food,"$1,234.50",2024-03-01,true\nB,Food,(12.00),2024-03-01,true\n'
    result = parse_csv(content)
    assert [row.amount for row in result.transactions] == [Decimal("1234.50"), Decimal("-12.00")]


def test_header_only():
    result = parse_csv(f"{HEADER}\n")
    assert result.success
    assert result.transactions == ()


def test_read_header_maps_indexes():
    columns = read_header(" amount , description,category,date,is_public")
    assert columns["amount"] == 0
    assert columns["description"] == 1


def test_quoted_field_after_space():
    result = parse_csv(f'{HEADER}\nDinner, "Food, drinks",-4.50,2024-03-01,true\n')

    assert result.success
    row = result.transactions[0]
    assert row.description == "Dinner"
    assert row.category == "Food, drinks"
    assert row.amount == Decimal("-4.50")
    assert row.is_public is True
