"""Date parsing utilities.

Transaction dates are plain calendar dates. They are parsed by splitting the
``YYYY-MM-DD`` text and building the date from its integer parts, so no
timezone conversion can move a transaction into a neighbouring day.
"""

import re
from datetime import date
from typing import Union

from dateutil.relativedelta import relativedelta

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def is_date_string(value: str) -> bool:
    """Return True if value has the literal ``YYYY-MM-DD`` shape."""
    return bool(DATE_PATTERN.match(value))


def parse_local_date(date_str: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a local calendar date.

    Args:
        date_str: Date string in YYYY-MM-DD format

    Returns:
        Date object

    Raises:
        ValueError: If the string is not YYYY-MM-DD or is not a real date
    """
    date_str = date_str.strip()
    if not is_date_string(date_str):
        raise ValueError(f"Invalid date format '{date_str}'. Use YYYY-MM-DD")

    year, month, day = (int(part) for part in date_str.split("-"))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_str}': {e}")


def to_local_date(value: Union[date, str]) -> date:
    """Return value as a date, parsing strings with parse_local_date."""
    if isinstance(value, date):
        return value
    return parse_local_date(value)


def in_month(value: Union[date, str], year: int, month: int) -> bool:
    """Return True if the date falls in the given calendar month."""
    d = to_local_date(value)
    return d.year == year and d.month == month


def in_year(value: Union[date, str], year: int) -> bool:
    """Return True if the date falls in the given calendar year."""
    return to_local_date(value).year == year


def month_name(value: Union[date, str, int]) -> str:
    """Get the English month name for a date, date string or month number."""
    if isinstance(value, int):
        return MONTH_NAMES[value - 1]
    return MONTH_NAMES[to_local_date(value).month - 1]


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the calendar month before the given one."""
    prev = date(year, month, 1) - relativedelta(months=1)
    return prev.year, prev.month


def parse_month(month_str: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` string or a relative month into (year, month).

    Supports "this month" and "last month" in addition to YYYY-MM.

    Raises:
        ValueError: If month string cannot be parsed
    """
    month_str = month_str.strip().lower()
    today = date.today()

    if month_str == "this month":
        return today.year, today.month
    if month_str == "last month":
        return previous_month(today.year, today.month)

    if not MONTH_PATTERN.match(month_str):
        raise ValueError(f"Could not parse month '{month_str}'. Use YYYY-MM")

    year, month = (int(part) for part in month_str.split("-"))
    if not 1 <= month <= 12:
        raise ValueError(f"Could not parse month '{month_str}': month must be 1-12")
    return year, month
