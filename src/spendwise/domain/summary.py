"""Summary and trend domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.aggregator import daily_spending, parse_period_key
from spendwise.domain.entities import (
    Bucket,
    BudgetType,
    ComparisonBucket,
    DailySpend,
    Granularity,
    MonthlySnapshot,
    SavingsSuggestion,
)
from spendwise.domain.errors import ValidationError
from spendwise.domain.grouping import compare_with_previous, group_by
from spendwise.domain.insights import monthly_snapshot, savings_suggestions


class SummaryService:
    """Service for building trend and insight views over stored transactions."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_trend(
        self,
        granularity: Granularity | str,
        selected_date: Optional[date] = None,
        selected_week_start: Optional[date] = None,
    ) -> list[Bucket]:
        """Bucket all transactions at the given granularity."""
        return group_by(
            self.db.list_transactions(),
            granularity,
            selected_date=selected_date,
            selected_week_start=selected_week_start,
        )

    def get_trend_comparison(
        self,
        granularity: Granularity | str,
        selected_date: Optional[date] = None,
        selected_week_start: Optional[date] = None,
    ) -> list[ComparisonBucket]:
        """Bucket all transactions and pair each bucket with the previous period."""
        return compare_with_previous(
            self.db.list_transactions(),
            granularity,
            selected_date=selected_date,
            selected_week_start=selected_week_start,
        )

    def get_calendar(self, period: str, category: Optional[str] = None) -> list[DailySpend]:
        """Daily spend for a ``MM_YYYY`` month against its saved budget.

        Months without a saved budget use an empty budget, so no day is
        flagged as over budget.

        Raises:
            ValidationError: If ``period`` is not a monthly key
        """
        parsed = parse_period_key(period)
        if parsed.kind != BudgetType.MONTHLY:
            raise ValidationError(f"Calendar needs a monthly period (MM_YYYY), got '{period}'")

        budget = self.db.get_budget(parsed.key)
        category_budgets: dict[str, Decimal] = budget.category_budgets if budget else {}
        transactions = self.db.list_transactions(start_date=parsed.start, end_date=parsed.end)
        return daily_spending(
            transactions, parsed.year, parsed.month, category_budgets, category=category
        )

    def get_snapshot(self, month: Optional[str] = None) -> MonthlySnapshot:
        """Headline figures for a ``YYYY-MM`` month (default: current)."""
        return monthly_snapshot(self.db.list_transactions(), month=month)

    def get_savings_suggestions(self, today: Optional[date] = None) -> list[SavingsSuggestion]:
        """Reduction suggestions for the top spending categories."""
        return savings_suggestions(self.db.list_transactions(), today=today)
