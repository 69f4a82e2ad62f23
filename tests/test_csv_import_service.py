"""Tests for CSVImportService."""

from datetime import date
from decimal import Decimal

import pytest

from cofi.domain.errors import ValidationError

HEADER = "description,category,amount,date,is_public"


def test_import_stores_rows_for_owner(import_service, transaction_service, sample_users):
    alice = sample_users["Alice"]
    content = (
        f"{HEADER}\n"
        "Coffee,Food,-4.50,2024-03-01,true\n"
        "Salary,Income,2000,2024-03-25,false\n"
    )

    result = import_service.import_csv(alice.id, content)

    assert result.imported == 2
    assert result.total == 2
    assert result.errors == ()
    assert len(result.transaction_ids) == 2

    stored = {
        v.transaction.description: v.transaction
        for v in transaction_service.list_visible_transactions(alice.id)
    }
    assert stored["Coffee"].amount == Decimal("-4.50")
    assert stored["Coffee"].date == date(2024, 3, 1)
    assert stored["Coffee"].is_public is True
    assert stored["Salary"].is_public is False
    assert all(t.owner_id == alice.id for t in stored.values())


def test_imported_rows_default_to_private(import_service, transaction_service, sample_users):
    alice = sample_users["Alice"]
    bob = sample_users["Bob"]
    import_service.import_csv(alice.id, f"{HEADER}\nGift,Presents,-30,2024-03-01,\n")

    assert transaction_service.list_visible_transactions(bob.id) == []
    assert len(transaction_service.list_visible_transactions(alice.id)) == 1


def test_impossible_date_fails_only_its_row(import_service, sample_users):
    alice = sample_users["Alice"]
    content = (
        f"{HEADER}\n"
        "First,Food,-1,2024-03-01,true\n"
        "Odd,Food,-2,2024-13-40,true\n"
        "Third,Food,-3,2024-03-03,true\n"
    )

    result = import_service.import_csv(alice.id, content)

    assert result.imported == 2
    assert result.total == 3
    assert result.parse_errors == ()
    assert len(result.insert_errors) == 1
    assert result.insert_errors[0].startswith("Transaction 2: Invalid date '2024-13-40'")


def test_parse_errors_reported_while_valid_rows_stored(import_service, sample_users):
    alice = sample_users["Alice"]
    content = (
        f"{HEADER}\n"
        "Coffee,Food,-4.50,2024-03-01,true\n"
        "Broken,Food,abc,2024-03-01,true\n"
    )

    result = import_service.import_csv(alice.id, content)

    assert result.imported == 1
    assert result.total == 1
    assert result.parse_errors == ('Row 3: Invalid amount "abc"',)
    assert result.errors == ('Row 3: Invalid amount "abc"',)


def test_missing_headers_raise(import_service, sample_users):
    with pytest.raises(ValidationError, match="Missing required headers: is_public"):
        import_service.import_csv(sample_users["Alice"].id, "description,category,amount,date\n")


def test_empty_content_raises(import_service, sample_users):
    with pytest.raises(ValidationError, match="CSV file is empty"):
        import_service.import_csv(sample_users["Alice"].id, "")


def test_header_only_imports_nothing(import_service, sample_users):
    result = import_service.import_csv(sample_users["Alice"].id, f"{HEADER}\n")
    assert result.imported == 0
    assert result.total == 0
    assert result.errors == ()


def test_import_file(import_service, sample_users, tmp_path):
    csv_file = tmp_path / "june.csv"
    csv_file.write_text(
        f"\ufeff{HEADER}\n\"Dinner, with friends\",Food,-45.00,2024-06-02,1\n",
        encoding="utf-8",
    )

    result = import_service.import_file(sample_users["Alice"].id, str(csv_file))

    assert result.imported == 1
    assert result.errors == ()


def test_import_missing_file(import_service, sample_users, tmp_path):
    with pytest.raises(FileNotFoundError):
        import_service.import_file(sample_users["Alice"].id, str(tmp_path / "nope.csv"))


def test_sub_cent_amount_fails_only_its_row(import_service, transaction_service, sample_users):
    alice = sample_users["Alice"]
    content = (
        f"{HEADER}\n"
        "Fuel,Car,-4.555,2024-03-01,true\n"
        "Parking,Car,-2.50,2024-03-01,true\n"
    )

    result = import_service.import_csv(alice.id, content)

    assert result.imported == 1
    assert result.insert_errors == ("Transaction 1: Amount -4.555 has more than 2 decimal places",)
    stored = transaction_service.list_all_transactions()
    assert [v.transaction.amount for v in stored] == [Decimal("-2.50")]
