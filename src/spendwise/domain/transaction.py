"""Transaction domain service."""

import logging
import re
import uuid
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import DEFAULT_CATEGORIES, ParsedInput, Transaction
from spendwise.domain.errors import (
    NotFoundError,
    ValidationError,
    transaction_not_found,
)
from spendwise.domain.text_parser import parse_natural_input

logger = logging.getLogger(__name__)

_CLOCK = re.compile(r"([01]\d|2[0-3]):[0-5]\d")

SUGGESTION_MIN_CHARS = 2
SUGGESTION_LIMIT = 5


def _validate_amount(amount: Decimal) -> Decimal:
    if amount < 0:
        raise ValidationError(f"Amount must not be negative, got {amount}")
    return amount.quantize(Decimal("0.01"))


def _validate_time(time: Optional[str]) -> Optional[str]:
    if time is not None and not _CLOCK.fullmatch(time):
        raise ValidationError(f"Invalid time '{time}': expected HH:MM (24h)")
    return time


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def create_transaction(
        self,
        amount: Decimal,
        category: str,
        date: date,
        description: str = "",
        time: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction.

        Args:
            amount: Spend amount, non-negative
            category: Category slug
            date: Transaction date
            description: Free text description
            time: Optional HH:MM time
            transaction_id: Optional ID; generated when omitted

        Returns:
            The stored transaction

        Raises:
            ValidationError: If amount is negative or time is malformed
            NotFoundError: If the category doesn't exist
        """
        self.category_service.require_category(category)
        transaction = Transaction(
            id=transaction_id or uuid.uuid4().hex,
            amount=_validate_amount(amount),
            description=description.strip(),
            category=category,
            date=date,
            time=_validate_time(time),
            created_at=datetime.now(UTC),
        )
        self.db.create_transaction(transaction)
        logger.info("Created transaction %s", transaction.id)
        return transaction

    def parse_text(self, text: str, today: Optional[date] = None) -> Optional[ParsedInput]:
        """Parse free text against the stored category list."""
        categories = self.category_service.list_categories() or DEFAULT_CATEGORIES
        return parse_natural_input(text, categories, today=today)

    def create_from_text(
        self,
        text: str,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        time: Optional[str] = None,
        today: Optional[date] = None,
    ) -> tuple[Transaction, Optional[ParsedInput]]:
        """Create a transaction from free text.

        Explicit arguments take precedence over parsed fields; fields the
        parser did not detect are never used to clear a value. The date
        defaults to today.

        Returns:
            Tuple of (stored transaction, parser output)

        Raises:
            ValidationError: If no amount was given or detected
        """
        today = today or datetime.now().date()
        parsed = self.parse_text(text, today=today)
        form = {}
        if parsed is not None:
            form = parsed.merge_into(form)
            form["date"] = parsed.date

        explicit = {
            "amount": amount,
            "description": description,
            "category": category,
            "date": date,
            "time": time,
        }
        form.update({key: value for key, value in explicit.items() if value is not None})

        if form.get("amount") is None:
            raise ValidationError(f"No amount found in '{text}'")

        transaction = self.create_transaction(
            amount=Decimal(form["amount"]),
            category=form.get("category") or "other",
            date=form.get("date") or today,
            description=form.get("description") or "",
            time=form.get("time"),
        )
        return transaction, parsed

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            category: Optional category slug filter

        Returns:
            List of transactions
        """
        return self.db.list_transactions(
            start_date=start_date, end_date=end_date, category=category
        )

    def update_transaction(
        self,
        transaction_id: str,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        time: Optional[str] = None,
    ) -> Transaction:
        """Update the given fields of a transaction.

        Raises:
            NotFoundError: If the transaction or new category doesn't exist
            ValidationError: If a new amount or time is invalid
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        fields = {}
        if amount is not None:
            fields["amount"] = _validate_amount(amount)
        if description is not None:
            fields["description"] = description.strip()
        if category is not None:
            self.category_service.require_category(category)
            fields["category"] = category
        if date is not None:
            fields["date"] = date
        if time is not None:
            fields["time"] = _validate_time(time)

        if fields:
            self.db.update_transaction(transaction_id, **fields)
        return self.db.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)

    def recent_descriptions(self, text: str) -> list[str]:
        """Suggest earlier descriptions containing ``text``, newest first."""
        if len(text) < SUGGESTION_MIN_CHARS:
            return []
        needle = text.lower()
        suggestions: list[str] = []
        for txn in self.db.list_transactions():
            description = txn.description
            if description and needle in description.lower() and description not in suggestions:
                suggestions.append(description)
                if len(suggestions) == SUGGESTION_LIMIT:
                    break
        return suggestions
