"""Transaction visibility rules.

A viewer sees their own transactions and every public one. Statistics are
the exception: they are computed over all transactions of all owners so
every household member gets the same numbers.
"""

from typing import Iterable, Optional

from cofi.domain.entities import Transaction, VisibleTransaction


def is_visible_to(txn: Transaction, viewer_id: int) -> bool:
    """Return True if the viewer may see the transaction."""
    return txn.owner_id == viewer_id or txn.is_public


def resolve_visible(
    viewer_id: int, transactions: Iterable[Transaction]
) -> list[VisibleTransaction]:
    """Filter transactions down to those the viewer may see.

    Args:
        viewer_id: ID of the viewing user
        transactions: Transactions to filter, in display order

    Returns:
        Visible transactions, in input order, annotated with is_owner
    """
    return [
        VisibleTransaction(transaction=txn, is_owner=txn.owner_id == viewer_id)
        for txn in transactions
        if is_visible_to(txn, viewer_id)
    ]


def resolve_all(
    transactions: Iterable[Transaction], viewer_id: Optional[int] = None
) -> list[VisibleTransaction]:
    """Return every transaction regardless of privacy, for statistics.

    Args:
        transactions: Transactions to annotate
        viewer_id: Optional viewer; without one is_owner is always False

    Returns:
        All transactions, in input order, annotated with is_owner
    """
    return [
        VisibleTransaction(
            transaction=txn,
            is_owner=viewer_id is not None and txn.owner_id == viewer_id,
        )
        for txn in transactions
    ]
