"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain entities stay stable
when the database schema changes.
"""

from cofi.domain import entities as domain
from cofi.database.models import (
    User as ORMUser,
    Transaction as ORMTransaction,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        created_at=orm_user.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    owner = orm_transaction.owner
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.owner_id,
        description=orm_transaction.description,
        category=orm_transaction.category,
        amount=orm_transaction.amount,
        date=orm_transaction.date,
        is_public=bool(orm_transaction.is_public),
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        owner_name=owner.username if owner is not None else None,
    )


def new_transaction_to_orm(record: domain.NewTransaction) -> ORMTransaction:
    """Convert a validated NewTransaction into an unsaved ORM Transaction."""
    return ORMTransaction(
        owner_id=record.owner_id,
        description=record.description,
        category=record.category,
        amount=record.amount,
        date=record.date,
        is_public=record.is_public,
    )
