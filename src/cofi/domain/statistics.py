"""Statistics aggregation over the household ledger.

The module-level functions are pure: they take a collection of transactions
and a reference period and never mutate their input. Month and year
membership always goes through the shared local-date helpers.
StatisticsService feeds them the full, unfiltered ledger from the store.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from cofi.database.base import Database
from cofi.domain.entities import (
    CategoryChange,
    CategoryShare,
    MonthlyCategorySpending,
    MonthlyNetBalance,
    MonthlyReport,
    MonthlyTotals,
    Transaction,
    User,
    VisibleTransaction,
)
from cofi.domain.visibility import resolve_all
from cofi.utils.date_parser import MONTH_NAMES, in_month, in_year, previous_month, to_local_date

UNCATEGORIZED = "Uncategorized"

# Recurring payments that would drown out every other category
EXCLUDED_CATEGORIES = frozenset({"Mortgage"})

MIN_INCREASE_SPENDING = Decimal("5")
TOP_LIMIT = 5

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def category_of(txn: Transaction) -> str:
    """Return the transaction category, defaulting to Uncategorized."""
    if txn.category and txn.category.strip():
        return txn.category
    return UNCATEGORIZED


def transactions_in_month(
    transactions: Iterable[Transaction], year: int, month: int
) -> list[Transaction]:
    """Return transactions dated in the given calendar month."""
    return [txn for txn in transactions if in_month(txn.date, year, month)]


def monthly_totals(transactions: Iterable[Transaction], year: int, month: int) -> MonthlyTotals:
    """Sum income and expenses for a calendar month.

    Positive amounts count as income, negative amounts as expenses (by
    absolute value). Zero amounts count as neither.
    """
    income = ZERO
    expenses = ZERO
    for txn in transactions_in_month(transactions, year, month):
        if txn.amount > 0:
            income += txn.amount
        elif txn.amount < 0:
            expenses += abs(txn.amount)

    return MonthlyTotals(income=income, expenses=expenses, net_balance=income - expenses)


def spending_by_category(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    excluded: Iterable[str] = (),
) -> dict[str, Decimal]:
    """Absolute expense total per category for a month.

    Categories appear in the order they are first seen.
    """
    excluded = frozenset(excluded)
    spending: dict[str, Decimal] = {}
    for txn in transactions_in_month(transactions, year, month):
        if txn.amount >= 0:
            continue
        category = category_of(txn)
        if category in excluded:
            continue
        spending[category] = spending.get(category, ZERO) + abs(txn.amount)
    return spending


def category_composition(
    transactions: Iterable[Transaction], year: int
) -> list[MonthlyCategorySpending]:
    """Expense composition by category for each month of a year.

    Returns twelve entries in calendar order. Every category seen anywhere in
    the year has a value in every month, zero where it had no spending.
    """
    by_month: dict[int, dict[str, Decimal]] = defaultdict(dict)
    categories: dict[str, None] = {}

    for txn in transactions:
        if txn.amount >= 0 or not in_year(txn.date, year):
            continue
        category = category_of(txn)
        categories.setdefault(category, None)
        month = to_local_date(txn.date).month
        by_month[month][category] = by_month[month].get(category, ZERO) + abs(txn.amount)

    return [
        MonthlyCategorySpending(
            month=name,
            spending={
                category: by_month.get(index, {}).get(category, ZERO)
                for category in categories
            },
        )
        for index, name in enumerate(MONTH_NAMES, start=1)
    ]


def change_percentage(current: Decimal, previous: Decimal) -> Decimal:
    """Percentage change from previous to current.

    A category with no previous spending counts as new and reports 100.
    """
    if previous > 0:
        return (current - previous) / previous * HUNDRED
    if current > 0:
        return HUNDRED
    return ZERO


def category_trend(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    excluded: Iterable[str] = EXCLUDED_CATEGORIES,
) -> list[CategoryChange]:
    """Compare each category's spending in a month with the month before.

    Only categories with expenses in the target month are returned, in the
    order they are first seen.
    """
    transactions = list(transactions)
    prev_year, prev_month = previous_month(year, month)

    current = spending_by_category(transactions, year, month, excluded)
    previous = spending_by_category(transactions, prev_year, prev_month, excluded)

    changes = []
    for category, amount in current.items():
        previous_amount = previous.get(category, ZERO)
        changes.append(
            CategoryChange(
                category=category,
                amount=amount,
                change_percentage=change_percentage(amount, previous_amount),
                raw_change=amount - previous_amount,
            )
        )
    return changes


def top_spending_categories(
    changes: Sequence[CategoryChange], limit: int = TOP_LIMIT
) -> list[CategoryChange]:
    """Categories with the highest spending; equal amounts keep input order."""
    return sorted(changes, key=lambda c: c.amount, reverse=True)[:limit]


def fastest_increasing(
    changes: Sequence[CategoryChange],
    min_spending: Decimal = MIN_INCREASE_SPENDING,
    limit: int = TOP_LIMIT,
) -> list[CategoryChange]:
    """Categories with the largest percentage increase.

    Categories below min_spending are ignored. Ties go to the higher amount.
    """
    eligible = [c for c in changes if c.amount >= min_spending]
    return sorted(eligible, key=lambda c: (-c.change_percentage, -c.amount))[:limit]


def fastest_decreasing(
    changes: Sequence[CategoryChange], limit: int = TOP_LIMIT
) -> list[CategoryChange]:
    """Categories with the largest percentage decrease, most negative first."""
    eligible = [c for c in changes if c.change_percentage < 0]
    return sorted(eligible, key=lambda c: (c.change_percentage, -c.amount))[:limit]


def private_spending_by_user(
    transactions: Iterable[Transaction],
    users: Sequence[User],
    year: int,
    month: int,
) -> dict[str, Decimal]:
    """Private expense total per user for a month.

    Every known user is present, with zero when they had no private
    spending. Owners missing from users are reported as "User <id>".
    """
    names = {user.id: user.username for user in users}
    spending: dict[str, Decimal] = {user.username: ZERO for user in users}

    for txn in transactions_in_month(transactions, year, month):
        if txn.is_public or txn.amount >= 0:
            continue
        name = names.get(txn.owner_id) or txn.owner_name or f"User {txn.owner_id}"
        spending[name] = spending.get(name, ZERO) + abs(txn.amount)
    return spending


def top_public_expenses(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    excluded: Iterable[str] = EXCLUDED_CATEGORIES,
    limit: int = TOP_LIMIT,
) -> list[Transaction]:
    """Largest public expenses of a month, most negative amount first."""
    excluded = frozenset(excluded)
    expenses = [
        txn
        for txn in transactions_in_month(transactions, year, month)
        if txn.is_public and txn.amount < 0 and category_of(txn) not in excluded
    ]
    return sorted(expenses, key=lambda txn: txn.amount)[:limit]


def category_spending_breakdown(
    transactions: Iterable[Transaction], year: int, month: int
) -> list[CategoryShare]:
    """Spending per category for a month with its share of the total.

    Categories are sorted by name.
    """
    spending = spending_by_category(transactions, year, month)
    total = sum(spending.values(), ZERO)
    return [
        CategoryShare(
            category=category,
            amount=spending[category],
            percentage=spending[category] / total * HUNDRED if total > 0 else ZERO,
        )
        for category in sorted(spending)
    ]


def net_balance_by_month(
    transactions: Iterable[Transaction], year: int, categories: Iterable[str]
) -> list[MonthlyNetBalance]:
    """Signed monthly totals of selected categories for a year and the year before.

    Returns an empty list when no categories are selected.
    """
    selected = frozenset(categories)
    if not selected:
        return []

    current = {index: ZERO for index in range(1, 13)}
    last = {index: ZERO for index in range(1, 13)}
    for txn in transactions:
        if txn.category not in selected:
            continue
        txn_date = to_local_date(txn.date)
        if txn_date.year == year:
            current[txn_date.month] += txn.amount
        elif txn_date.year == year - 1:
            last[txn_date.month] += txn.amount

    return [
        MonthlyNetBalance(month=name, current_year=current[index], last_year=last[index])
        for index, name in enumerate(MONTH_NAMES, start=1)
    ]


def available_years(transactions: Iterable[Transaction], default_year: int) -> list[int]:
    """Distinct transaction years, newest first; [default_year] if none."""
    years = sorted({to_local_date(txn.date).year for txn in transactions}, reverse=True)
    return years or [default_year]


def build_monthly_report(
    transactions: Iterable[Transaction], users: Sequence[User], year: int, month: int
) -> MonthlyReport:
    """Assemble the monthly household report."""
    transactions = list(transactions)
    changes = category_trend(transactions, year, month)
    return MonthlyReport(
        year=year,
        month=month,
        totals=monthly_totals(transactions, year, month),
        private_spending=private_spending_by_user(transactions, users, year, month),
        top_categories=tuple(top_spending_categories(changes)),
        increasing_categories=tuple(fastest_increasing(changes)),
        decreasing_categories=tuple(fastest_decreasing(changes)),
        top_public_expenses=tuple(top_public_expenses(transactions, year, month)),
    )


class StatisticsService:
    """Service computing statistics over every transaction in the store."""

    def __init__(self, db: Database):
        """Initialize statistics service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_statistics_transactions(
        self, viewer_id: Optional[int] = None
    ) -> list[VisibleTransaction]:
        """All transactions of all owners, private ones included."""
        return resolve_all(self.db.get_all_transactions(), viewer_id=viewer_id)

    def _ledger(self) -> list[Transaction]:
        return [visible.transaction for visible in self.get_statistics_transactions()]

    def monthly_report(self, year: int, month: int) -> MonthlyReport:
        """Build the monthly report for the household."""
        return build_monthly_report(self._ledger(), self.db.get_users(), year, month)

    def category_composition(self, year: int) -> list[MonthlyCategorySpending]:
        """Monthly category composition for a year."""
        return category_composition(self._ledger(), year)

    def category_breakdown(self, year: int, month: int) -> list[CategoryShare]:
        """Category spending shares for a month."""
        return category_spending_breakdown(self._ledger(), year, month)

    def net_balance(self, year: int, categories: Iterable[str]) -> list[MonthlyNetBalance]:
        """Monthly net balance of the selected categories."""
        return net_balance_by_month(self._ledger(), year, categories)

    def available_years(self, default_year: int) -> list[int]:
        """Years that have transactions."""
        return available_years(self._ledger(), default_year)
