"""Tests for budget-versus-actual aggregation."""

import pytest
from datetime import date
from decimal import Decimal
from spendwise.domain.aggregator import (
    budget_alerts,
    budget_health,
    daily_spending,
    filter_by_period,
    parse_period_key,
    percent_of,
    summarize,
)
from spendwise.domain.entities import AlertSeverity, BudgetType
from spendwise.domain.errors import ValidationError


class TestParsePeriodKey:
    """Period keys name a month or a year."""

    def test_monthly(self):
        """MM_YYYY keys describe a calendar month."""
        period = parse_period_key("02_2024")

        assert period.kind == BudgetType.MONTHLY
        assert period.start == date(2024, 2, 1)
        assert period.end == date(2024, 2, 29)
        assert period.key == "02_2024"

    def test_yearly(self):
        """YYYY keys describe a calendar year."""
        period = parse_period_key("2025")

        assert period.kind == BudgetType.YEARLY
        assert (period.start, period.end) == (date(2025, 1, 1), date(2025, 12, 31))

    @pytest.mark.parametrize("key", ["13_2025", "3_2025", "2025-03", "march", ""])
    def test_malformed(self, key):
        """Anything else is rejected."""
        with pytest.raises(ValidationError):
            parse_period_key(key)


def test_percent_of_rounds_half_up():
    """Percentages are whole numbers rounded half up."""
    assert percent_of(Decimal("1"), Decimal("8")) == 13
    assert percent_of(Decimal("5"), Decimal("200")) == 3


def test_percent_of_zero_whole():
    """A zero budget reads as 0%, not a division error."""
    assert percent_of(Decimal("50"), Decimal("0")) == 0


def test_filter_by_period_month_boundaries(make_transaction):
    """Month-end is inside the period and the next month's first day is not."""
    transactions = [
        make_transaction(1, day=date(2025, 2, 28)),
        make_transaction(2, day=date(2025, 3, 1)),
        make_transaction(3, day=date(2025, 3, 31)),
        make_transaction(4, day=date(2025, 4, 1)),
    ]

    selected = filter_by_period(transactions, "03_2025")

    assert [txn.amount for txn in selected] == [Decimal("2"), Decimal("3")]


def test_filter_by_period_malformed_key_matches_nothing(make_transaction):
    """A bad key selects no transactions instead of raising."""
    assert filter_by_period([make_transaction(5)], "garbage") == []


class TestSummarize:
    """Totals and per-category breakdown."""

    def test_breakdown(self, make_transaction):
        """Spend is totalled per category against its budget."""
        transactions = [
            make_transaction(300, "food", date(2025, 3, 2)),
            make_transaction(150, "food", date(2025, 3, 20)),
            make_transaction(200, "transport", date(2025, 3, 5)),
            make_transaction(999, "food", date(2025, 4, 1)),
        ]

        summary = summarize(transactions, {"food": 500, "transport": 1000}, "03_2025")

        assert summary.total_budget == Decimal("1500")
        assert summary.total_spent == Decimal("650")
        assert summary.balance == Decimal("850")
        food = summary.category_breakdown["food"]
        assert (food.spent, food.remaining, food.percentage) == (
            Decimal("450"), Decimal("50"), 90,
        )
        assert summary.category_breakdown["transport"].percentage == 20

    def test_balance_is_exact(self, make_transaction):
        """Decimal arithmetic keeps the balance exact."""
        transactions = [
            make_transaction("0.10", day=date(2025, 3, 1)),
            make_transaction("0.20", day=date(2025, 3, 2)),
        ]

        summary = summarize(transactions, {"food": Decimal("0.30")}, "03_2025")

        assert summary.balance == Decimal("0")
        assert summary.balance == summary.total_budget - summary.total_spent

    def test_unbudgeted_category_listed_after_budgeted(self, make_transaction):
        """Spending without a budget still shows up, at 0%."""
        transactions = [
            make_transaction(40, "shopping", date(2025, 3, 3)),
            make_transaction(10, "food", date(2025, 3, 3)),
        ]

        summary = summarize(transactions, {"food": 100}, "03_2025")

        assert list(summary.category_breakdown) == ["food", "shopping"]
        shopping = summary.category_breakdown["shopping"]
        assert shopping.budget == Decimal("0")
        assert shopping.percentage == 0
        assert shopping.is_over_budget

    def test_spent_matches_category_sum(self, make_transaction):
        """Per-category spend equals the summed absolute amounts in the period."""
        transactions = [
            make_transaction(-25, "food", date(2025, 1, 10)),
            make_transaction(75, "food", date(2025, 12, 31)),
            make_transaction(10, "bills", date(2025, 6, 1)),
            make_transaction(500, "food", date(2026, 1, 1)),
        ]

        summary = summarize(transactions, {"food": 1000, "bills": 50}, "2025")

        assert summary.category_breakdown["food"].spent == Decimal("100")
        assert summary.category_breakdown["bills"].spent == Decimal("10")
        assert summary.total_spent == Decimal("110")

    def test_percentage_is_not_capped(self, make_transaction):
        """Overspending shows above 100%."""
        summary = summarize([make_transaction(300, day=date(2025, 3, 1))], {"food": 100}, "03_2025")
        assert summary.category_breakdown["food"].percentage == 300

    def test_empty(self):
        """No transactions and no budget gives zeros."""
        summary = summarize([], {}, "03_2025")

        assert summary.total_budget == summary.total_spent == summary.balance == 0
        assert summary.category_breakdown == {}


def test_budget_alerts(make_transaction):
    """Categories at 80% warn; at 100% they are over budget."""
    transactions = [
        make_transaction(85, "food", date(2025, 3, 1)),
        make_transaction(120, "transport", date(2025, 3, 1)),
        make_transaction(10, "bills", date(2025, 3, 1)),
        make_transaction(50, "shopping", date(2025, 3, 1)),
    ]
    summary = summarize(transactions, {"food": 100, "transport": 100, "bills": 100}, "03_2025")

    alerts = {alert.category: alert.severity for alert in budget_alerts(summary)}

    assert alerts == {
        "food": AlertSeverity.WARNING,
        "transport": AlertSeverity.OVER_BUDGET,
    }


class TestBudgetHealth:
    """Health meter levels."""

    def test_untouched_budget(self):
        """Nothing spent is full health."""
        health = budget_health([], {"food": 1000}, "03_2025")

        assert health.health_percentage == 100
        assert health.level == "Master Saver"

    def test_partially_spent(self, make_transaction):
        """Health is the unspent share of the budget."""
        health = budget_health([make_transaction(450, day=date(2025, 3, 4))], {"food": 1000}, "03_2025")

        assert health.health_percentage == 55
        assert health.level == "Needs Focus"

    def test_overspent_is_clamped(self, make_transaction):
        """Overspending bottoms out at zero."""
        health = budget_health([make_transaction(5000, day=date(2025, 3, 4))], {"food": 1000}, "03_2025")

        assert health.health_percentage == 0
        assert health.level == "At Risk"

    def test_no_budget(self, make_transaction):
        """Without a budget health is zero."""
        health = budget_health([make_transaction(10, day=date(2025, 3, 4))], {}, "03_2025")
        assert health.health_percentage == 0


def test_daily_spending(make_transaction):
    """Each day of the month is compared with the average daily budget."""
    transactions = [
        make_transaction(50, "food", date(2025, 4, 1)),
        make_transaction(150, "food", date(2025, 4, 2)),
        make_transaction(500, "travel", date(2025, 4, 2)),
        make_transaction(1000, "food", date(2025, 5, 1)),
    ]
    budgets = {"food": 3000, "travel": 0}

    days = daily_spending(transactions, 2025, 4, budgets)

    assert len(days) == 30
    assert days[0].day == date(2025, 4, 1)
    assert (days[0].spent, days[0].over_budget) == (Decimal("50"), False)
    assert (days[1].spent, days[1].over_budget) == (Decimal("650"), True)
    assert days[29].spent == Decimal("0")

    food_only = daily_spending(transactions, 2025, 4, budgets, category="food")
    assert food_only[1].spent == Decimal("150")
    assert food_only[1].over_budget


def test_daily_spending_without_budget(make_transaction):
    """A month with no budget flags no day, however much is spent."""
    days = daily_spending([make_transaction(10, "food", date(2025, 4, 1))], 2025, 4, {})

    assert days[0].spent == Decimal("10")
    assert not days[0].over_budget

    zero_category = daily_spending(
        [make_transaction(10, "travel", date(2025, 4, 1))], 2025, 4, {"travel": 0},
        category="travel",
    )
    assert not zero_category[0].over_budget
