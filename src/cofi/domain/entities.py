"""Domain model entities for cofi.

These are pure data classes representing business concepts, independent of
database schema. Storage and presentation layers convert to and from them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class User:
    """Household member domain entity."""

    id: int
    username: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    owner_id: int
    description: str
    category: str
    amount: Decimal
    date: date
    is_public: bool
    created_at: datetime
    updated_at: datetime
    owner_name: Optional[str] = None


@dataclass(frozen=True)
class NewTransaction:
    """Validated fields for a transaction that has not been stored yet."""

    owner_id: int
    description: str
    category: str
    amount: Decimal
    date: date
    is_public: bool


@dataclass(frozen=True)
class VisibleTransaction:
    """Transaction annotated for a particular viewer.

    ``is_owner`` is computed on read and never persisted.
    """

    transaction: Transaction
    is_owner: bool


@dataclass(frozen=True)
class InsertOutcome:
    """Result of inserting one row of a batch."""

    index: int
    transaction_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CSVTransaction:
    """A CSV row that passed parse-level validation.

    ``date`` keeps the raw ``YYYY-MM-DD`` text; calendar validity is checked
    when the row is stored.
    """

    row_num: int
    description: str
    category: str
    amount: Decimal
    date: str
    is_public: bool


@dataclass(frozen=True)
class CSVParseResult:
    """Outcome of parsing a CSV document."""

    success: bool
    transactions: tuple[CSVTransaction, ...] = ()
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a batch CSV import."""

    imported: int
    total: int
    parse_errors: tuple[str, ...] = ()
    insert_errors: tuple[str, ...] = ()
    transaction_ids: tuple[int, ...] = ()

    @property
    def errors(self) -> tuple[str, ...]:
        return self.parse_errors + self.insert_errors


@dataclass(frozen=True)
class MonthlyTotals:
    """Income, expenses and net balance for one calendar month."""

    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class MonthlyCategorySpending:
    """Expense totals per category for one calendar month."""

    month: str
    spending: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryChange:
    """Current month spending of a category compared with the previous month."""

    category: str
    amount: Decimal
    change_percentage: Decimal
    raw_change: Decimal


@dataclass(frozen=True)
class CategoryShare:
    """Spending of a category and its share of the month's spending."""

    category: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class MonthlyNetBalance:
    """Signed totals for a calendar month in a year and the year before."""

    month: str
    current_year: Decimal
    last_year: Decimal


@dataclass(frozen=True)
class MonthlyReport:
    """Everything shown on the monthly household report."""

    year: int
    month: int
    totals: MonthlyTotals
    private_spending: dict[str, Decimal]
    top_categories: tuple[CategoryChange, ...]
    increasing_categories: tuple[CategoryChange, ...]
    decreasing_categories: tuple[CategoryChange, ...]
    top_public_expenses: tuple[Transaction, ...]
