"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from spendwise.domain.entities import (
    Budget,
    BudgetType,
    Category,
    ComparisonBucket,
    Period,
    Transaction,
)


class TestTransaction:
    """Tests for Transaction entity."""

    def test_immutability(self):
        """Transactions are frozen."""
        txn = Transaction(
            id="abc",
            amount=Decimal("10.00"),
            description="tea",
            category="food",
            date=date(2025, 3, 1),
        )
        with pytest.raises(FrozenInstanceError):
            txn.amount = Decimal("20")

    def test_time_is_optional(self):
        """A transaction need not carry a time."""
        txn = Transaction(id="a", amount=Decimal("1"), description="", category="other", date=date(2025, 1, 1))
        assert txn.time is None


class TestPeriod:
    """Tests for Period arithmetic."""

    def test_month_end_in_leap_year(self):
        """February 2024 ends on the 29th."""
        assert Period(BudgetType.MONTHLY, 2024, 2).end == date(2024, 2, 29)

    def test_contains(self):
        """contains() is inclusive at both ends of the month."""
        march = Period(BudgetType.MONTHLY, 2025, 3)

        assert march.contains(date(2025, 3, 1))
        assert march.contains(date(2025, 3, 31))
        assert not march.contains(date(2025, 4, 1))
        assert not march.contains(date(2024, 3, 15))


def test_budget_type_from_period_key():
    """Monthly keys contain an underscore, yearly keys do not."""
    assert Budget(period="03_2025").budget_type == BudgetType.MONTHLY
    assert Budget(period="2025").budget_type == BudgetType.YEARLY


def test_comparison_change():
    """change is the current amount minus the previous amount."""
    row = ComparisonBucket("2025-03", Decimal("80"), "2025-02", Decimal("100"))
    assert row.change == Decimal("-20")


def test_category_equality():
    """Categories compare by value."""
    assert Category("food", "Food") == Category("food", "Food")
    assert Category("food", "Food") != Category("food", "Meals")
