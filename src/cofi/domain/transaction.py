"""Transaction domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from cofi.database.base import Database
from cofi.domain.entities import (
    NewTransaction,
    Transaction as TransactionEntity,
    VisibleTransaction,
)
from cofi.domain.errors import NotFoundOrForbidden, ValidationError, transaction_not_found
from cofi.domain.visibility import resolve_all, resolve_visible
from cofi.logger import get_logger
from cofi.utils.amount_parser import to_amount
from cofi.utils.date_parser import to_local_date

logger = get_logger(__name__)

AMOUNT_PLACES = 2


def _require_text(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def build_new_transaction(
    owner_id: int,
    description: str,
    category: str,
    amount: Union[Decimal, int, float, str],
    date: Union[date, str],
    is_public: bool,
) -> NewTransaction:
    """Validate transaction fields and bundle them for storage.

    Raises:
        ValidationError: If any field has the wrong shape
    """
    description = _require_text(description, "Description")
    category = _require_text(category, "Category")

    try:
        amount = to_amount(amount)
    except ValueError as e:
        raise ValidationError(str(e))
    # The store keeps two decimal places
    if amount.normalize().as_tuple().exponent < -AMOUNT_PLACES:
        raise ValidationError(f"Amount {amount} has more than {AMOUNT_PLACES} decimal places")

    try:
        txn_date = to_local_date(date)
    except (ValueError, TypeError, AttributeError) as e:
        raise ValidationError(str(e))

    if not isinstance(is_public, bool):
        raise ValidationError("is_public must be true or false")

    return NewTransaction(
        owner_id=owner_id,
        description=description,
        category=category,
        amount=amount,
        date=txn_date,
        is_public=is_public,
    )


class TransactionService:
    """Service for creating, changing and listing transactions.

    Every mutation is scoped to the calling owner.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        owner_id: int,
        description: str,
        category: str,
        amount: Union[Decimal, int, float, str],
        date: Union[date, str],
        is_public: bool = True,
    ) -> TransactionEntity:
        """Create a transaction owned by the caller.

        Args:
            owner_id: ID of the creating user
            description: Non-empty description
            category: Non-empty category name (advisory, not checked against config)
            amount: Signed amount; negative for expenses
            date: Date or YYYY-MM-DD string
            is_public: Visibility, public by default

        Returns:
            The stored transaction

        Raises:
            ValidationError: If a field is malformed
            StorageError: If the store fails
        """
        record = build_new_transaction(owner_id, description, category, amount, date, is_public)
        transaction_id = self.db.insert_transaction(record)
        logger.info(
            "transaction_created",
            transaction_id=transaction_id,
            owner_id=owner_id,
            is_public=record.is_public,
        )
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        owner_id: int,
        description: str,
        category: str,
        amount: Union[Decimal, int, float, str],
        date: Union[date, str],
        is_public: bool,
    ) -> TransactionEntity:
        """Replace the editable fields of an owned transaction.

        The owner is never changed.

        Raises:
            ValidationError: If a field is malformed
            NotFoundOrForbidden: If the transaction is missing or owned by someone else
        """
        record = build_new_transaction(owner_id, description, category, amount, date, is_public)
        affected = self.db.update_transaction(
            transaction_id,
            owner_id,
            {
                "description": record.description,
                "category": record.category,
                "amount": record.amount,
                "date": record.date,
                "is_public": record.is_public,
            },
        )
        if affected == 0:
            raise NotFoundOrForbidden(transaction_not_found(transaction_id))

        logger.info("transaction_updated", transaction_id=transaction_id, owner_id=owner_id)
        return self.db.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int, owner_id: int) -> None:
        """Permanently delete an owned transaction.

        Raises:
            NotFoundOrForbidden: If the transaction is missing or owned by someone else
        """
        affected = self.db.delete_transaction(transaction_id, owner_id)
        if affected == 0:
            raise NotFoundOrForbidden(transaction_not_found(transaction_id))
        logger.info("transaction_deleted", transaction_id=transaction_id, owner_id=owner_id)

    def list_visible_transactions(self, viewer_id: int) -> list[VisibleTransaction]:
        """Transactions the viewer may see, newest first."""
        return resolve_visible(viewer_id, self.db.get_transactions_by_owner_or_public(viewer_id))

    def list_all_transactions(self, viewer_id: Optional[int] = None) -> list[VisibleTransaction]:
        """Every transaction regardless of privacy, newest first."""
        return resolve_all(self.db.get_all_transactions(), viewer_id=viewer_id)
