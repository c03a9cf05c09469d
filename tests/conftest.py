"""Shared pytest fixtures for expensetrack tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from expensetrack.database.base import Database
from expensetrack.database.factories import create_sqlite_database
from expensetrack.domain.entities import Expense
from expensetrack.domain.errors import PersistenceError
from expensetrack.domain.expense import ExpenseService

NOW = datetime(2025, 8, 20, 12, 0, 0)
TODAY = NOW.date()


class FailingDatabase(Database):
    """Repository whose writes always fail; used to exercise save errors."""

    def __init__(self, expenses=()):
        self.expenses = list(expenses)
        self.write_attempts = 0

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def _fail(self):
        self.write_attempts += 1
        raise PersistenceError("disk full")

    def save_expense(self, expense):
        self._fail()

    def save_expenses(self, expenses):
        self._fail()

    def delete_expense(self, expense_id):
        self._fail()

    def load_expenses(self):
        return list(self.expenses)


def make_expense(**overrides) -> Expense:
    """Build an Expense entity with sensible defaults."""
    fields = {
        "id": "a" * 32,
        "title": "Coffee",
        "amount": Decimal("3.50"),
        "category": "Food",
        "date": TODAY,
        "created_at": datetime(2025, 8, 1, tzinfo=UTC),
        "is_archived": False,
    }
    fields.update(overrides)
    return Expense(**fields)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database and a fixed clock."""
    return ExpenseService(temp_db, clock=lambda: NOW)


@pytest.fixture
def failing_db():
    return FailingDatabase()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
