"""Spending insights derived from the transaction list."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from spendwise.domain.entities import MonthlySnapshot, SavingsSuggestion, Transaction

CENTS = Decimal("0.01")

# (monthly spend above, reduction percent, difficulty, reasoning)
REDUCTION_TIERS = (
    (Decimal("5000"), 20, "medium", "High spending category - moderate reduction achievable"),
    (Decimal("2000"), 15, "easy", "Moderate spending - easy to optimize"),
    (Decimal("0"), 10, "easy", "Low spending category - small reduction"),
)


def _category_totals(transactions: Sequence[Transaction]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for txn in transactions:
        totals[txn.category] += abs(txn.amount)
    return dict(totals)


def monthly_snapshot(
    transactions: Sequence[Transaction], month: Optional[str] = None
) -> MonthlySnapshot:
    """Headline figures for a ``YYYY-MM`` month (default: the current one)."""
    if month is None:
        month = date.today().strftime("%Y-%m")

    in_month = [txn for txn in transactions if txn.date.strftime("%Y-%m") == month]
    total = sum((abs(txn.amount) for txn in in_month), Decimal("0"))
    totals = _category_totals(in_month)

    top_category = None
    top_amount = Decimal("0")
    if totals:
        # max() keeps the first category on ties
        top_category = max(totals, key=lambda category: totals[category])
        top_amount = totals[top_category]

    average = (total / len(in_month)).quantize(CENTS) if in_month else Decimal("0")
    return MonthlySnapshot(
        month=month,
        total_spent=total,
        transaction_count=len(in_month),
        top_category=top_category,
        top_category_amount=top_amount,
        average_transaction=average,
    )


def savings_suggestions(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
    months: int = 3,
    limit: int = 3,
) -> list[SavingsSuggestion]:
    """Suggest reductions for the highest-spend categories.

    Looks at transactions from the first day of the month ``months`` months
    ago onward and averages each category's spend over ``months``.
    """
    if today is None:
        today = date.today()
    window_start = today.replace(day=1) - relativedelta(months=months)

    recent = [txn for txn in transactions if txn.date >= window_start]
    totals = _category_totals(recent)
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    suggestions = []
    for category, total in ranked[:limit]:
        monthly = (total / months).quantize(CENTS)
        for floor, reduction, difficulty, reasoning in REDUCTION_TIERS:
            if monthly > floor or floor == 0:
                break
        suggestions.append(
            SavingsSuggestion(
                category=category,
                current_spending=monthly,
                suggested_reduction=reduction,
                potential_savings=(monthly * reduction / 100).quantize(CENTS),
                difficulty=difficulty,
                reasoning=reasoning,
            )
        )
    return suggestions
