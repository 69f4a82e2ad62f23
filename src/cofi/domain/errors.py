"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``kind`` is the tag callers
    use when reporting a structured failure.
    """

    kind = "domain"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    kind = "validation"


class NotFoundOrForbidden(DomainError):
    """Entity does not exist or is not owned by the caller.

    Both cases raise this one error with the same message so that callers
    cannot probe for transactions that belong to other users.
    """

    kind = "not_found_or_forbidden"


class ParseError(DomainError):
    """A single CSV row could not be parsed."""

    kind = "parse"

    def __init__(self, row_num: int, message: str):
        self.row_num = row_num
        super().__init__(f"Row {row_num}: {message}")


class StorageError(DomainError):
    """The ledger store failed to complete an operation."""

    kind = "storage"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for a missing or foreign transaction."""
    return f"Transaction {transaction_id} not found"


def user_not_found(username: str) -> str:
    """Return message for missing user by name."""
    return f"User '{username}' not found"


def missing_csv_headers(missing: list[str]) -> str:
    """Return message for a CSV header lacking required columns."""
    return f"Missing required headers: {', '.join(missing)}"
