"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

MONTHS = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))

# Checked in order; the first keyword present wins.
_KEYWORD_OFFSETS = (
    ("yesterday", 1),
    ("today", 0),
    ("last week", 7),
)
GENERIC_DATE_WORDS = re.compile(r"\b(?:yesterday|today|last week)\b")

_NUMERIC_DATE = re.compile(r"(?<!\d)(\d{1,4})[/-](\d{1,2})[/-](\d{1,4})(?!\d)")
_DAY_MONTH_YEAR = re.compile(
    rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s*(?:of\s+)?({_MONTH_NAMES})\b\.?,?\s*(\d{{4}})\b"
)
_MONTH_DAY_YEAR = re.compile(
    rf"\b({_MONTH_NAMES})\b\.?\s*(\d{{1,2}})(?:st|nd|rd|th)?,?\s*(\d{{4}})\b"
)

DateHit = tuple[date, tuple[int, int]]


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _find_keyword(text: str, today: date) -> Optional[DateHit]:
    for keyword, days_back in _KEYWORD_OFFSETS:
        match = re.search(rf"\b{keyword}\b", text)
        if match is not None:
            return today - timedelta(days=days_back), match.span()
    return None


def _find_numeric(text: str, today: date) -> Optional[DateHit]:
    for match in _NUMERIC_DATE.finditer(text):
        first, month, last = match.groups()
        if int(first) > 1900:
            # A first group this large cannot be a day: read year-month-day.
            year, day = int(first), int(last)
            if len(last) > 2:
                continue
        else:
            day = int(first)
            if len(last) == 2:
                year = 2000 + int(last)
            elif len(last) == 4:
                year = int(last)
            else:
                continue
        resolved = _safe_date(year, int(month), day)
        if resolved is not None:
            return resolved, match.span()
    return None


def _find_natural(text: str, today: date) -> Optional[DateHit]:
    match = _DAY_MONTH_YEAR.search(text)
    if match is not None:
        day, month_name, year = match.groups()
        resolved = _safe_date(int(year), MONTHS[month_name], int(day))
        if resolved is not None:
            return resolved, match.span()

    match = _MONTH_DAY_YEAR.search(text)
    if match is not None:
        month_name, day, year = match.groups()
        resolved = _safe_date(int(year), MONTHS[month_name], int(day))
        if resolved is not None:
            return resolved, match.span()
    return None


_CASCADE: tuple[Callable[[str, date], Optional[DateHit]], ...] = (
    _find_keyword,
    _find_numeric,
    _find_natural,
)


def find_date(text: str, today: date) -> Optional[DateHit]:
    """Find a date mentioned in lower-cased free text.

    Tried in order: the keywords "yesterday", "today" and "last week";
    numeric D/M/Y or Y/M/D (``-`` or ``/`` separated, 2-digit years are
    20YY); "3rd of July 2025" and "July 3rd, 2025". All-numeric dates where
    both leading groups are 12 or less are read day-first; that reading is a
    guess.

    Args:
        text: Lower-cased input
        today: Reference date for relative keywords

    Returns:
        ``(date, span)`` or None when nothing valid was found
    """
    for finder in _CASCADE:
        hit = finder(text, today)
        if hit is not None:
            return hit
    return None


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", "15/01/2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return week_start(today) - timedelta(days=7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return week_start(today)

    # ISO dates are unambiguous; everything else is read day-first.
    try:
        if re.fullmatch(r"\d{4}-\d{1,2}-\d{1,2}", date_str):
            return date_parser.isoparse(date_str).date()
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, this-week, last-month, last-year, last-week)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "this-week":
        return (week_start(today), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-week":
        start_date = week_start(today) - timedelta(days=7)
        return (start_date, start_date + timedelta(days=6))

    else:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: this-month, this-year, this-week, last-month, last-year, last-week")
