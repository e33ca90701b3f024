"""Tests for date parsing: free-text date detection and CLI date strings."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from spendwise.utils.date_parser import find_date, get_date_range, parse_date, week_start

TODAY = date(2025, 3, 15)


class TestFindDate:
    """Date detection inside lower-cased free text."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("lunch yesterday", date(2025, 3, 14)),
            ("coffee today", date(2025, 3, 15)),
            ("rent last week", date(2025, 3, 8)),
        ],
    )
    def test_keywords(self, text, expected):
        """Relative keywords resolve against the reference date."""
        found, _ = find_date(text, TODAY)
        assert found == expected

    def test_keyword_needs_word_boundary(self):
        """'todays' is not 'today'."""
        assert find_date("todays special", TODAY) is None

    def test_day_month_year(self):
        """Numeric dates default to day-month-year."""
        found, span = find_date("paid on 05/03/2025", TODAY)
        assert found == date(2025, 3, 5)
        assert span == (8, 18)

    def test_two_digit_year(self):
        """Two-digit years are read as 20YY."""
        found, _ = find_date("cab 7-3-25", TODAY)
        assert found == date(2025, 3, 7)

    def test_year_first(self):
        """A leading group above 1900 switches to year-month-day."""
        found, _ = find_date("2025-03-04 groceries", TODAY)
        assert found == date(2025, 3, 4)

    def test_ambiguous_numeric_date_reads_day_first(self):
        """03-04-2025 is taken as 3 April; the input carries no way to tell."""
        found, _ = find_date("03-04-2025", TODAY)
        assert found == date(2025, 4, 3)

    def test_invalid_calendar_date_is_not_detected(self):
        """31 February is skipped rather than rolled over."""
        assert find_date("dinner 31/02/2025", TODAY) is None

    def test_invalid_numeric_falls_through_to_later_match(self):
        """An impossible numeric date does not hide a valid one after it."""
        found, _ = find_date("99/99/2025 then 01/02/2025", TODAY)
        assert found == date(2025, 2, 1)

    @pytest.mark.parametrize(
        "text",
        [
            "dinner on 3rd of july 2025",
            "dinner on 3rd july 2025",
            "dinner on july 3rd, 2025",
            "dinner on jul 3 2025",
        ],
    )
    def test_natural_language(self, text):
        """Ordinal and month-name forms all land on the same day."""
        found, _ = find_date(text, TODAY)
        assert found == date(2025, 7, 3)

    def test_sept_abbreviation(self):
        """'sept' is accepted alongside 'sep'."""
        found, _ = find_date("1st sept 2024", TODAY)
        assert found == date(2024, 9, 1)

    def test_keyword_wins_over_numeric(self):
        """The cascade stops at the first finder with a hit."""
        found, _ = find_date("yesterday not 01/01/2024", TODAY)
        assert found == date(2025, 3, 14)

    def test_no_date(self):
        """Plain text has no date."""
        assert find_date("spent 50 on snacks", TODAY) is None


def test_week_start_is_monday():
    """week_start snaps any day back to its Monday."""
    assert week_start(date(2025, 3, 15)) == date(2025, 3, 10)
    assert week_start(date(2025, 3, 10)) == date(2025, 3, 10)


class TestParseDate:
    """Date strings given on the command line."""

    def test_iso(self):
        """ISO dates are parsed exactly."""
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_relative_days(self):
        """today, yesterday and tomorrow are relative to the current date."""
        today = date.today()
        assert parse_date("today") == today
        assert parse_date("Yesterday") == today - timedelta(days=1)
        assert parse_date("tomorrow") == today + timedelta(days=1)

    def test_relative_periods(self):
        """'last'/'this' periods resolve to the first day of the period."""
        today = date.today()
        assert parse_date("this month") == today.replace(day=1)
        assert parse_date("last month") == (today - relativedelta(months=1)).replace(day=1)
        assert parse_date("this year") == date(today.year, 1, 1)
        assert parse_date("last year") == date(today.year - 1, 1, 1)
        assert parse_date("last week").weekday() == 0

    def test_day_first_formats(self):
        """Slash dates are read day-first, matching bank exports."""
        assert parse_date("15/01/2024") == date(2024, 1, 15)
        assert parse_date("02/03/2024") == date(2024, 3, 2)
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_invalid(self):
        """Unparseable input raises ValueError."""
        with pytest.raises(ValueError):
            parse_date("last invalid")


class TestGetDateRange:
    """Named periods used by the CLI period flags."""

    def test_this_periods_end_today(self):
        """this-* ranges run from the period start to today."""
        today = date.today()
        assert get_date_range("this-month") == (today.replace(day=1), today)
        assert get_date_range("this-year") == (date(today.year, 1, 1), today)
        start, end = get_date_range("this-week")
        assert start.weekday() == 0
        assert end == today

    def test_last_month_covers_whole_month(self):
        """last-month ends on the day before the current month starts."""
        today = date.today()
        start, end = get_date_range("last-month")
        assert start == (today - relativedelta(months=1)).replace(day=1)
        assert end == today.replace(day=1) - timedelta(days=1)

    def test_last_year(self):
        """last-year is the full previous calendar year."""
        year = date.today().year - 1
        assert get_date_range("last-year") == (date(year, 1, 1), date(year, 12, 31))

    def test_last_week_is_monday_to_sunday(self):
        """last-week spans seven days starting on a Monday."""
        start, end = get_date_range("last-week")
        assert start.weekday() == 0
        assert end.weekday() == 6
        assert (end - start).days == 6

    def test_unknown_period(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("invalid-period")
