"""Generic SQLAlchemy database implementation."""

from typing import Iterable, Optional
from sqlalchemy import literal_column
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expensetrack.database.base import Database
from expensetrack.database.models import Expense, create_session_factory
from expensetrack.database.mappers import expense_to_domain, expense_to_orm
from expensetrack.domain.entities import Expense as DomainExpense
from expensetrack.domain.errors import PersistenceError
from expensetrack.utils.logger import get_logger

logger = get_logger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db',
                'sqlite://' for an in-memory database)
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _commit(self, session: Session, action: str) -> None:
        """Commit, rolling back and raising PersistenceError on failure."""
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database commit failed while %s: %s", action, e)
            raise PersistenceError(f"Could not {action}: {e}") from e

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def _merge(self, session: Session, expense: DomainExpense) -> None:
        row = session.get(Expense, expense.id)
        if row is None:
            session.add(expense_to_orm(expense))
        else:
            expense_to_orm(expense, row)

    def save_expense(self, expense: DomainExpense) -> None:
        """Insert or update a single expense."""
        session = self._get_session()
        try:
            self._merge(session, expense)
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Could not save expense {expense.id}: {e}") from e
        self._commit(session, f"save expense {expense.id}")

    def save_expenses(self, expenses: Iterable[DomainExpense]) -> None:
        """Insert or update several expenses in one transaction."""
        session = self._get_session()
        try:
            for expense in expenses:
                self._merge(session, expense)
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Could not save expenses: {e}") from e
        self._commit(session, "save expenses")

    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense row if it exists."""
        session = self._get_session()
        try:
            row = session.get(Expense, expense_id)
            if row is not None:
                session.delete(row)
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Could not delete expense {expense_id}: {e}") from e
        self._commit(session, f"delete expense {expense_id}")

    def load_expenses(self) -> list[DomainExpense]:
        """Load all expenses ordered by creation time, then insertion order."""
        session = self._get_session()
        try:
            rows = (
                session.query(Expense)
                .order_by(Expense.created_at, literal_column("rowid"))
                .all()
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not load expenses: {e}") from e
        return [expense_to_domain(row) for row in rows]
