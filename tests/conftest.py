"""Shared pytest fixtures for cofi tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from cofi.config import HouseholdConfig
from cofi.database.factories import create_sqlite_database
from cofi.domain.entities import Transaction
from cofi.domain.csv_import import CSVImportService
from cofi.domain.statistics import StatisticsService
from cofi.domain.transaction import TransactionService
from cofi.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def household_config():
    """A two-person household configuration."""
    return HouseholdConfig(users=("Alice", "Bob"), predefined_categories=("Groceries", "Rent"))


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def statistics_service(temp_db):
    """Create a StatisticsService with a temporary database."""
    return StatisticsService(temp_db)


@pytest.fixture
def sample_users(user_service, household_config):
    """Register Alice and Bob and return them by name."""
    user_service.sync_users(household_config)
    return {user.username: user for user in user_service.list_users()}


@pytest.fixture
def config_file(tmp_path):
    """Write a household config file and return its path."""
    path = tmp_path / "config.toml"
    path.write_text(
        'predefined_categories = ["Groceries", "Rent"]\n'
        "\n"
        "[[users]]\n"
        'name = "Alice"\n'
        "\n"
        "[[users]]\n"
        'name = "Bob"\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def make_transaction(
    id: int = 1,
    owner_id: int = 1,
    amount: str = "-10.00",
    category: str = "Food",
    date_value: date = date(2024, 6, 1),
    is_public: bool = True,
    description: str = "Test",
    owner_name: str | None = None,
) -> Transaction:
    """Build an in-memory Transaction entity."""
    now = datetime(2024, 1, 1, tzinfo=UTC)
    return Transaction(
        id=id,
        owner_id=owner_id,
        description=description,
        category=category,
        amount=Decimal(amount),
        date=date_value,
        is_public=is_public,
        created_at=now,
        updated_at=now,
        owner_name=owner_name,
    )


@pytest.fixture
def txn_factory():
    """Return the make_transaction helper."""
    return make_transaction
