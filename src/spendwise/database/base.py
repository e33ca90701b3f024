"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from spendwise.domain.entities import Budget, Category, Transaction


class Database(ABC):
    """Abstract database interface for spendwise."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, category: Category) -> None:
        """Store a new category."""
        pass

    @abstractmethod
    def get_category(self, value: str) -> Optional[Category]:
        """Get category by slug."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories in creation order."""
        pass

    @abstractmethod
    def update_category(self, category: Category) -> None:
        """Replace label, emoji and color of an existing category."""
        pass

    @abstractmethod
    def delete_category(self, value: str) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def count_transactions_in_category(self, value: str) -> int:
        """Count transactions referring to a category slug."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, transaction: Transaction) -> None:
        """Store a new transaction."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: str, **fields: Any) -> None:
        """Update the given transaction fields."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category: Optional category slug filter
        """
        pass

    # Budget operations
    @abstractmethod
    def save_budget(self, budget: Budget) -> None:
        """Insert or replace the budget for ``budget.period``."""
        pass

    @abstractmethod
    def get_budget(self, period: str) -> Optional[Budget]:
        """Get budget by period key."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets ordered by period key."""
        pass

    @abstractmethod
    def delete_budget(self, period: str) -> None:
        """Delete a budget."""
        pass
