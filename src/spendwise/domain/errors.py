"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def category_not_found(value: str) -> str:
    """Return message for missing category by slug."""
    return f"Category '{value}' not found"


def duplicate_category(value: str) -> str:
    """Return message for a category slug that is already taken."""
    return f"Category '{value}' already exists"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def budget_not_found(period: str) -> str:
    """Return message for missing budget."""
    return f"No budget saved for period '{period}'"


def invalid_period_key(period: str) -> str:
    """Return message for a malformed budget period key."""
    return (
        f"Invalid period '{period}': expected MM_YYYY for a month "
        "or YYYY for a year"
    )


def category_delete_blocked(value: str, transaction_count: int) -> str:
    """Return message when a category is still referenced by transactions."""
    return (
        f"Cannot delete category '{value}': it is used by "
        f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )
