"""Utility functions for cofi."""

from cofi.utils.date_parser import parse_local_date, parse_month, in_month
from cofi.utils.amount_parser import parse_amount, to_amount

__all__ = ["parse_local_date", "parse_month", "in_month", "parse_amount", "to_amount"]
