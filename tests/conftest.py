"""Shared pytest fixtures for spendwise tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from spendwise.database.factories import create_sqlite_database
from spendwise.domain.budget import BudgetService
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import Transaction
from spendwise.domain.summary import SummaryService
from spendwise.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with the default categories loaded."""
    service = CategoryService(temp_db)
    service.ensure_defaults()
    return service


@pytest.fixture
def transaction_service(temp_db, category_service):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db, category_service):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def summary_service(temp_db, category_service):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def make_transaction():
    """Build in-memory transactions for pure-function tests."""
    counter = iter(range(1, 10_000))

    def _make(amount, category="food", day=date(2025, 3, 15), time=None, description="") -> Transaction:
        return Transaction(
            id=f"t{next(counter)}",
            amount=Decimal(str(amount)),
            description=description,
            category=category,
            date=day,
            time=time,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
