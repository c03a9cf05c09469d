"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable

# Import entities directly to avoid circular import through domain/__init__.py
from expensetrack.domain.entities import Expense


class Database(ABC):
    """Abstract repository for expense records.

    Implementations raise PersistenceError when a write cannot be stored.
    """

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

    @abstractmethod
    def save_expense(self, expense: Expense) -> None:
        """Insert the expense, or overwrite the stored row with the same id."""
        pass

    @abstractmethod
    def save_expenses(self, expenses: Iterable[Expense]) -> None:
        """Save several expenses in a single transaction."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: str) -> None:
        """Delete the stored row for an expense, if any."""
        pass

    @abstractmethod
    def load_expenses(self) -> list[Expense]:
        """Load every stored expense in insertion order."""
        pass
