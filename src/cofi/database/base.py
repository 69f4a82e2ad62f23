"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from cofi.domain.entities import (
    User,
    Transaction,
    NewTransaction,
    InsertOutcome,
)


class Database(ABC):
    """Abstract ledger store interface for cofi.

    Mutating transaction calls are scoped to an owner and return the number
    of affected rows; zero means the transaction is missing or belongs to
    someone else. Implementations raise StorageError on store failures.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, username: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user_by_name(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def get_users(self) -> list[User]:
        """List all users ordered by username."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transactions_by_owner_or_public(self, owner_id: int) -> list[Transaction]:
        """List the owner's transactions plus every public one, newest first."""
        pass

    @abstractmethod
    def get_all_transactions(self) -> list[Transaction]:
        """List every transaction of every owner, newest first."""
        pass

    @abstractmethod
    def insert_transaction(self, record: NewTransaction) -> int:
        """Insert a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def insert_transactions(self, records: Sequence[NewTransaction]) -> list[InsertOutcome]:
        """Insert records sequentially inside one storage transaction.

        A row that fails is rolled back on its own and reported in its
        outcome; rows inserted before it are kept.
        """
        pass

    @abstractmethod
    def update_transaction(
        self, transaction_id: int, owner_id: int, fields: dict[str, Any]
    ) -> int:
        """Update an owned transaction. Returns rows affected."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int, owner_id: int) -> int:
        """Delete an owned transaction. Returns rows affected."""
        pass
