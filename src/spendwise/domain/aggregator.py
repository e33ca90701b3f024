"""Budget aggregation: spend versus budget for a period.

Two percentage readings exist and are kept apart on purpose:

- ``CategoryBreakdown.percentage`` is spend as a share of budget and is not
  capped, so an overspent category reads above 100.
- ``BudgetHealth.health_percentage`` is the unspent share of the total
  budget, clamped to 0..100.
"""

import calendar
import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional, Sequence

from spendwise.domain.entities import (
    AlertSeverity,
    BudgetAlert,
    BudgetHealth,
    BudgetSummary,
    BudgetType,
    CategoryBreakdown,
    DailySpend,
    Period,
    Transaction,
)
from spendwise.domain.errors import ValidationError, invalid_period_key

logger = logging.getLogger(__name__)

ALERT_THRESHOLD = 80
OVER_BUDGET_THRESHOLD = 100

# (minimum health percentage, level, tip), checked top down.
HEALTH_LEVELS = (
    (95, "Master Saver", "Amazing! You are a budgeting master."),
    (80, "Budget Pro", "Great job! Keep up the smart spending."),
    (60, "On Track", "You are doing well, but watch a few categories."),
    (40, "Needs Focus", "Review your spending and adjust as needed."),
    (0, "At Risk", "Warning: You are at risk of overspending!"),
)

_MONTH_KEY = re.compile(r"(\d{2})_(\d{4})")
_YEAR_KEY = re.compile(r"\d{4}")


def parse_period_key(key: str) -> Period:
    """Parse a ``MM_YYYY`` or ``YYYY`` period key.

    Raises:
        ValidationError: If the key has neither shape or the month is out of range
    """
    key = key.strip()
    match = _MONTH_KEY.fullmatch(key)
    if match is not None:
        month, year = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValidationError(invalid_period_key(key))
        return Period(BudgetType.MONTHLY, year, month)
    if _YEAR_KEY.fullmatch(key):
        return Period(BudgetType.YEARLY, int(key))
    raise ValidationError(invalid_period_key(key))


def percent_of(part: Decimal, whole: Decimal) -> int:
    """Return ``part / whole`` as a whole percentage, half up; 0 if ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int((part / whole * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def filter_by_period(
    transactions: Iterable[Transaction], period: str | Period
) -> list[Transaction]:
    """Return the transactions dated inside ``period``.

    A malformed period key matches nothing.
    """
    if isinstance(period, str):
        try:
            period = parse_period_key(period)
        except ValidationError as e:
            logger.warning("%s; no transactions selected", e)
            return []
    return [txn for txn in transactions if period.contains(txn.date)]


def summarize(
    transactions: Sequence[Transaction],
    category_budgets: Mapping[str, Decimal | int | float],
    period: str | Period,
) -> BudgetSummary:
    """Compute totals and the per-category breakdown for a period.

    The breakdown lists budgeted categories in budget-map order, followed by
    categories that have spending in the period but no budget.

    Args:
        transactions: All known transactions; filtered to the period here
        category_budgets: Category slug to budgeted amount
        period: ``MM_YYYY``/``YYYY`` key or a Period

    Returns:
        BudgetSummary where ``balance == total_budget - total_spent`` exactly
    """
    period_key = period.key if isinstance(period, Period) else period
    in_period = filter_by_period(transactions, period)

    budgets = {category: _to_decimal(amount) for category, amount in category_budgets.items()}
    spent_by_category: dict[str, Decimal] = {category: Decimal("0") for category in budgets}
    for txn in in_period:
        spent_by_category[txn.category] = (
            spent_by_category.get(txn.category, Decimal("0")) + abs(txn.amount)
        )

    breakdown: dict[str, CategoryBreakdown] = {}
    for category, spent in spent_by_category.items():
        budget = budgets.get(category, Decimal("0"))
        breakdown[category] = CategoryBreakdown(
            budget=budget,
            spent=spent,
            remaining=budget - spent,
            percentage=percent_of(spent, budget),
        )

    total_budget = sum(budgets.values(), Decimal("0"))
    total_spent = sum((abs(txn.amount) for txn in in_period), Decimal("0"))

    logger.debug(
        "Summarized %d of %d transactions for %s",
        len(in_period),
        len(transactions),
        period_key,
    )
    return BudgetSummary(
        period=period_key,
        total_budget=total_budget,
        total_spent=total_spent,
        balance=total_budget - total_spent,
        category_breakdown=breakdown,
    )


def budget_alerts(summary: BudgetSummary) -> list[BudgetAlert]:
    """Return categories at or above 80% of a positive budget."""
    alerts = []
    for category, row in summary.category_breakdown.items():
        if row.budget <= 0 or row.percentage < ALERT_THRESHOLD:
            continue
        severity = (
            AlertSeverity.OVER_BUDGET
            if row.percentage >= OVER_BUDGET_THRESHOLD
            else AlertSeverity.WARNING
        )
        alerts.append(
            BudgetAlert(
                category=category,
                budget=row.budget,
                spent=row.spent,
                percentage=row.percentage,
                severity=severity,
            )
        )
    return alerts


def health_level(health_percentage: int) -> tuple[str, str]:
    """Return ``(level, tip)`` for a health percentage."""
    for minimum, level, tip in HEALTH_LEVELS:
        if health_percentage >= minimum:
            return level, tip
    return HEALTH_LEVELS[-1][1], HEALTH_LEVELS[-1][2]


def budget_health(
    transactions: Sequence[Transaction],
    category_budgets: Mapping[str, Decimal | int | float],
    period: str | Period,
) -> BudgetHealth:
    """Compute the health meter: unspent share of the total budget, 0..100."""
    summary = summarize(transactions, category_budgets, period)
    if summary.total_budget > 0:
        unspent = summary.total_budget - summary.total_spent
        health = max(0, min(100, percent_of(unspent, summary.total_budget)))
    else:
        health = 0
    level, tip = health_level(health)
    return BudgetHealth(
        total_budget=summary.total_budget,
        total_spent=summary.total_spent,
        health_percentage=health,
        level=level,
        tip=tip,
    )


def daily_spending(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    category_budgets: Mapping[str, Decimal | int | float],
    category: Optional[str] = None,
) -> list[DailySpend]:
    """Spend per calendar day of a month, flagged against the daily budget.

    The daily budget is the month's budget (one category's when ``category``
    is given, else the total) spread evenly over the days of the month. With
    no budget nothing is flagged.
    """
    days_in_month = calendar.monthrange(year, month)[1]
    spent = [Decimal("0")] * days_in_month
    for txn in transactions:
        if txn.date.year != year or txn.date.month != month:
            continue
        if category is not None and txn.category != category:
            continue
        spent[txn.date.day - 1] += abs(txn.amount)

    if category is not None:
        monthly_budget = _to_decimal(category_budgets.get(category, 0))
    else:
        monthly_budget = sum(
            (_to_decimal(amount) for amount in category_budgets.values()), Decimal("0")
        )
    daily_budget = monthly_budget / days_in_month

    period = Period(BudgetType.MONTHLY, year, month)
    return [
        DailySpend(
            day=period.start.replace(day=index + 1),
            spent=amount,
            over_budget=daily_budget > 0 and amount > daily_budget,
        )
        for index, amount in enumerate(spent)
    ]
