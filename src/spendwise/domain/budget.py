"""Budget domain service."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from spendwise.database.base import Database
from spendwise.domain.aggregator import (
    budget_alerts,
    budget_health,
    parse_period_key,
    summarize,
)
from spendwise.domain.entities import Budget, BudgetAlert, BudgetHealth, BudgetSummary
from spendwise.domain.errors import NotFoundError, ValidationError, budget_not_found

logger = logging.getLogger(__name__)


class BudgetService:
    """Service for saving budgets and reporting spend against them."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def save_budget(
        self,
        period: str,
        category_budgets: Mapping[str, Decimal],
        income: Optional[Decimal] = None,
        goals: Iterable[str] = (),
    ) -> Budget:
        """Create or replace the budget for a period.

        Args:
            period: ``MM_YYYY`` or ``YYYY`` key
            category_budgets: Category slug to budgeted amount
            income: Optional expected income
            goals: Free-text goals, in order

        Returns:
            The saved budget

        Raises:
            ValidationError: If the period key is malformed or an amount is negative
        """
        key = parse_period_key(period).key
        amounts = {}
        for category, amount in category_budgets.items():
            amount = Decimal(amount)
            if amount < 0:
                raise ValidationError(
                    f"Budget for '{category}' must not be negative, got {amount}"
                )
            amounts[category] = amount
        if income is not None and income < 0:
            raise ValidationError(f"Income must not be negative, got {income}")

        budget = Budget(
            period=key,
            category_budgets=amounts,
            income=income,
            goals=tuple(goal.strip() for goal in goals if goal.strip()),
        )
        self.db.save_budget(budget)
        logger.info("Saved %s budget for %s", budget.budget_type.value, key)
        return self.db.get_budget(key)

    def get_budget(self, period: str) -> Optional[Budget]:
        """Get the budget for a period key, or None."""
        return self.db.get_budget(parse_period_key(period).key)

    def require_budget(self, period: str) -> Budget:
        """Get the budget for a period key, raising if none is saved."""
        budget = self.get_budget(period)
        if budget is None:
            raise NotFoundError(budget_not_found(period))
        return budget

    def list_budgets(self) -> list[Budget]:
        """List saved budgets ordered by period key."""
        return self.db.list_budgets()

    def delete_budget(self, period: str) -> None:
        """Delete the budget for a period key."""
        self.db.delete_budget(parse_period_key(period).key)

    def get_summary(self, period: str) -> BudgetSummary:
        """Budget-versus-actual summary for a saved budget."""
        budget = self.require_budget(period)
        return summarize(self.db.list_transactions(), budget.category_budgets, budget.period)

    def get_alerts(self, period: str) -> list[BudgetAlert]:
        """Categories at or above the alert threshold for a saved budget."""
        return budget_alerts(self.get_summary(period))

    def get_health(self, period: str) -> BudgetHealth:
        """Health meter for a saved budget."""
        budget = self.require_budget(period)
        return budget_health(
            self.db.list_transactions(), budget.category_budgets, budget.period
        )
