"""Utility functions for spendwise."""

from spendwise.utils.date_parser import find_date, parse_date, week_start
from spendwise.utils.amount_parser import find_amount, parse_amount
from spendwise.utils.time_parser import find_time

__all__ = [
    "find_date",
    "parse_date",
    "week_start",
    "find_amount",
    "parse_amount",
    "find_time",
]
