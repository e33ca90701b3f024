"""Domain model entities for spendwise.

These are pure data classes representing business concepts, independent of
the storage schema. The parsing and aggregation code only ever sees these
records, never ORM objects.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from dateutil.relativedelta import relativedelta


class Granularity(str, Enum):
    """Bucket size for trend views."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class BudgetType(str, Enum):
    """Budget period kind, derived from the shape of the period key."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class AlertSeverity(str, Enum):
    """Budget alert severity."""

    WARNING = "warning"
    OVER_BUDGET = "over_budget"


@dataclass(frozen=True)
class Category:
    """Spending category. ``value`` is the unique slug."""

    value: str
    label: str
    emoji: str = ""
    color: str = ""


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category("food", "Food & Dining", "🍔", "red"),
    Category("transport", "Transportation", "🚗", "blue"),
    Category("shopping", "Shopping", "🛍️", "purple"),
    Category("entertainment", "Entertainment", "🎬", "green"),
    Category("health", "Health & Fitness", "💊", "pink"),
    Category("bills", "Bills & Utilities", "⚡", "yellow"),
    Category("education", "Education", "📚", "indigo"),
    Category("travel", "Travel", "✈️", "teal"),
    Category("other", "Other", "📦", "gray"),
)


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is the absolute value of the spend; ``time`` is ``HH:MM`` in
    24-hour clock when known.
    """

    id: str
    amount: Decimal
    description: str
    category: str
    date: date
    time: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Period:
    """A monthly (``MM_YYYY``) or yearly (``YYYY``) budget period."""

    kind: BudgetType
    year: int
    month: Optional[int] = None

    @property
    def key(self) -> str:
        if self.kind == BudgetType.MONTHLY:
            return f"{self.month:02d}_{self.year:04d}"
        return f"{self.year:04d}"

    @property
    def start(self) -> date:
        if self.kind == BudgetType.MONTHLY:
            return date(self.year, self.month, 1)
        return date(self.year, 1, 1)

    @property
    def end(self) -> date:
        """Last day of the period, inclusive."""
        if self.kind == BudgetType.MONTHLY:
            return self.start + relativedelta(months=1, days=-1)
        return date(self.year, 12, 31)

    def contains(self, day: date) -> bool:
        if day.year != self.year:
            return False
        return self.kind == BudgetType.YEARLY or day.month == self.month


@dataclass(frozen=True)
class Budget:
    """Budget for one period."""

    period: str
    category_budgets: dict[str, Decimal] = field(default_factory=dict)
    income: Optional[Decimal] = None
    goals: tuple[str, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def budget_type(self) -> BudgetType:
        return BudgetType.MONTHLY if "_" in self.period else BudgetType.YEARLY


@dataclass(frozen=True)
class ParsedInput:
    """Fields extracted from free text.

    A ``None`` field means no evidence was found for it, not zero.
    """

    amount: Optional[Decimal] = None
    description: Optional[str] = None
    date: Optional[date] = None
    time: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return only the detected fields, with ISO-formatted dates."""
        result: dict[str, Any] = {}
        if self.amount is not None:
            result["amount"] = self.amount
        if self.description is not None:
            result["description"] = self.description
        if self.date is not None:
            result["date"] = self.date.isoformat()
        if self.time is not None:
            result["time"] = self.time
        if self.category is not None:
            result["category"] = self.category
        return result

    def merge_into(self, existing: dict[str, Any]) -> dict[str, Any]:
        """Overlay detected fields on ``existing`` without clearing any field."""
        merged = dict(existing)
        merged.update(self.to_dict())
        return merged


@dataclass(frozen=True)
class Bucket:
    """One aggregation unit of a trend view."""

    label: str
    amount: Decimal


@dataclass(frozen=True)
class ComparisonBucket:
    """A bucket paired with its previous-period counterpart."""

    label: str
    amount: Decimal
    previous_label: str
    previous_amount: Decimal

    @property
    def change(self) -> Decimal:
        return self.amount - self.previous_amount


@dataclass(frozen=True)
class CategoryBreakdown:
    """Budget-versus-actual figures for one category."""

    budget: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: int

    @property
    def is_over_budget(self) -> bool:
        return self.spent > self.budget


@dataclass(frozen=True)
class BudgetSummary:
    """Totals and per-category breakdown for a period."""

    period: str
    total_budget: Decimal
    total_spent: Decimal
    balance: Decimal
    category_breakdown: dict[str, CategoryBreakdown]


@dataclass(frozen=True)
class BudgetAlert:
    """A category that has reached the alert threshold."""

    category: str
    budget: Decimal
    spent: Decimal
    percentage: int
    severity: AlertSeverity


@dataclass(frozen=True)
class BudgetHealth:
    """Health meter reading: share of the budget still unspent."""

    total_budget: Decimal
    total_spent: Decimal
    health_percentage: int
    level: str
    tip: str


@dataclass(frozen=True)
class DailySpend:
    """Spend for one calendar day against the average daily budget."""

    day: date
    spent: Decimal
    over_budget: bool


@dataclass(frozen=True)
class MonthlySnapshot:
    """Headline figures for one month."""

    month: str
    total_spent: Decimal
    transaction_count: int
    top_category: Optional[str]
    top_category_amount: Decimal
    average_transaction: Decimal


@dataclass(frozen=True)
class SavingsSuggestion:
    """Suggested reduction for a high-spend category."""

    category: str
    current_spending: Decimal
    suggested_reduction: int
    potential_savings: Decimal
    difficulty: str
    reasoning: str
