"""Category domain service."""

import logging
import re
from decimal import Decimal
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.entities import DEFAULT_CATEGORIES, Category
from spendwise.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
    duplicate_category,
)

logger = logging.getLogger(__name__)

DEFAULT_EMOJI = "📦"
DEFAULT_COLOR = "gray"


def slugify(value: str) -> str:
    """Lower-case ``value`` and join whitespace-separated words with hyphens."""
    return re.sub(r"\s+", "-", value.strip().lower())


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        label: str,
        value: Optional[str] = None,
        emoji: str = DEFAULT_EMOJI,
        color: str = DEFAULT_COLOR,
    ) -> Category:
        """Create a category.

        Args:
            label: Display name
            value: Slug; derived from the label when omitted
            emoji: Display emoji
            color: Color tag

        Returns:
            The created category

        Raises:
            ValidationError: If label or slug is empty
            ConflictError: If the slug is already taken
        """
        if not label or not label.strip():
            raise ValidationError("Category label must not be empty")
        slug = slugify(value if value is not None else label)
        if not slug:
            raise ValidationError("Category value must not be empty")
        if self.db.get_category(slug) is not None:
            raise ConflictError(duplicate_category(slug))

        category = Category(value=slug, label=label.strip(), emoji=emoji, color=color)
        self.db.create_category(category)
        logger.info("Created category %s", slug)
        return category

    def get_category(self, value: str) -> Optional[Category]:
        """Get category by slug.

        Args:
            value: Category slug

        Returns:
            Category or None if not found
        """
        return self.db.get_category(value)

    def require_category(self, value: str) -> Category:
        """Get category by slug, raising if it does not exist."""
        category = self.db.get_category(value)
        if category is None:
            raise NotFoundError(category_not_found(value))
        return category

    def list_categories(self) -> list[Category]:
        """List categories in creation order.

        Returns:
            List of categories; this is the snapshot handed to the parser
        """
        return self.db.list_categories()

    def update_category(
        self,
        value: str,
        label: Optional[str] = None,
        emoji: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Update display fields of a category. The slug never changes."""
        current = self.require_category(value)
        updated = Category(
            value=current.value,
            label=label.strip() if label else current.label,
            emoji=emoji if emoji is not None else current.emoji,
            color=color if color is not None else current.color,
        )
        self.db.update_category(updated)
        return updated

    def delete_category(self, value: str) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If transactions still refer to it
        """
        self.require_category(value)
        usage = self.db.count_transactions_in_category(value)
        if usage > 0:
            raise DependencyError(category_delete_blocked(value, usage))
        self.db.delete_category(value)
        logger.info("Deleted category %s", value)

    def get_usage(self, value: str) -> tuple[int, Decimal]:
        """Return transaction count and total spend for a category."""
        transactions = self.db.list_transactions(category=value)
        total = sum((abs(txn.amount) for txn in transactions), Decimal("0"))
        return len(transactions), total

    def ensure_defaults(self) -> int:
        """Create any missing default category.

        Returns:
            Number of categories created
        """
        created = 0
        for category in DEFAULT_CATEGORIES:
            if self.db.get_category(category.value) is None:
                self.db.create_category(category)
                created += 1
        return created
