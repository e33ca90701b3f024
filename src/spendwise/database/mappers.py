"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the parsing and aggregation
code never depends on the storage schema.
"""

from decimal import Decimal

from spendwise.domain import entities as domain
from spendwise.database.models import (
    Budget as ORMBudget,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        value=orm_category.value,
        label=orm_category.label,
        emoji=orm_category.emoji or "",
        color=orm_category.color or "",
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        amount=Decimal(orm_transaction.amount),
        description=orm_transaction.description or "",
        category=orm_transaction.category,
        date=orm_transaction.date,
        time=orm_transaction.time,
        created_at=orm_transaction.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        period=orm_budget.period,
        category_budgets={
            category: Decimal(amount)
            for category, amount in (orm_budget.category_budgets or {}).items()
        },
        income=Decimal(orm_budget.income) if orm_budget.income is not None else None,
        goals=tuple(orm_budget.goals or ()),
        created_at=orm_budget.created_at,
        updated_at=orm_budget.updated_at,
    )


def category_budgets_to_json(category_budgets: dict[str, Decimal]) -> dict[str, str]:
    """Serialize budget amounts for the JSON column."""
    return {category: str(amount) for category, amount in category_budgets.items()}
