"""Expense domain service.

ExpenseService is the expense store: it owns the in-memory collection,
validates and applies every change, writes the change through to the
repository and notifies subscribers.
"""

from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence
import uuid

from expensetrack.domain import stats
from expensetrack.domain.entities import (
    ArchiveRange,
    CategoryTotal,
    DailyCategoryTotal,
    EventKind,
    Expense,
    PieSlice,
    SpendingStats,
    StoreEvent,
)
from expensetrack.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    empty_title,
    expense_not_found,
    invalid_amount,
    persistence_failed,
)
from expensetrack.utils.amount_parser import to_amount
from expensetrack.utils.logger import get_logger

if TYPE_CHECKING:
    from expensetrack.database.base import Database

logger = get_logger(__name__)

Listener = Callable[[StoreEvent], None]


def _validate_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError(empty_title())
    return title


def _validate_amount(amount) -> Decimal:
    try:
        return to_amount(amount)
    except ValueError:
        raise ValidationError(invalid_amount(amount))


def _normalize_category(category: Optional[str]) -> str:
    # Free text is tolerated, including an empty label
    return (category or "").strip()


def _validate_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError(f"Date '{value}' is not a calendar date")
    return value


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db: "Database", clock: Optional[Callable[[], datetime]] = None):
        """Initialize expense service and load stored expenses.

        Args:
            db: Database instance
            clock: Returns the current time; defaults to ``datetime.now``

        Raises:
            PersistenceError: If stored expenses cannot be loaded
        """
        self.db = db
        self.clock = clock or datetime.now
        self._expenses: list[Expense] = list(db.load_expenses())
        self._listeners: list[Listener] = []
        logger.debug("Loaded %d expenses", len(self._expenses))

    # Change notification

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed for %s event", listener, event.kind.value)

    def _persist(self, action: str, write: Callable[[], None]) -> Optional[PersistenceError]:
        """Run a repository write; failures are logged and returned, not raised."""
        try:
            write()
        except PersistenceError as e:
            logger.warning(persistence_failed(action, e))
            return e
        return None

    def _commit(
        self,
        kind: EventKind,
        expenses: Sequence[Expense],
        action: str,
        write: Callable[[], None],
    ) -> StoreEvent:
        error = self._persist(action, write)
        event = StoreEvent(
            kind=kind,
            expense_ids=tuple(expense.id for expense in expenses),
            persistence_error=error,
        )
        self._notify(event)
        return event

    # Lookups

    def _index_of(self, expense_id: str) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        logger.warning("Stale reference to expense %s", expense_id)
        raise NotFoundError(expense_not_found(expense_id))

    def _now(self, now: Optional[date | datetime]) -> date | datetime:
        return self.clock() if now is None else now

    def get(self, expense_id: str) -> Expense:
        """Get expense by ID.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        return self._expenses[self._index_of(expense_id)]

    def all_expenses(self) -> list[Expense]:
        """Every expense in insertion order."""
        return list(self._expenses)

    # Mutations

    def add(self, title: str, amount, category: str, date) -> Expense:
        """Create an active expense.

        Args:
            title: Non-empty title
            amount: Finite number, or a string accepted by parse_amount
            category: Category label
            date: Expense date

        Returns:
            The new expense

        Raises:
            ValidationError: If title is blank or amount is not a finite number
                below MAX_AMOUNT
        """
        expense = Expense(
            id=uuid.uuid4().hex,
            title=_validate_title(title),
            amount=_validate_amount(amount),
            category=_normalize_category(category),
            date=_validate_date(date),
            created_at=datetime.now(UTC),
            is_archived=False,
        )
        self._expenses.append(expense)
        logger.info("Added expense %s (%s %s)", expense.id, expense.title, expense.amount)
        self._commit(
            EventKind.ADDED,
            [expense],
            f"new expense {expense.id}",
            lambda: self.db.save_expense(expense),
        )
        return expense

    def update(
        self,
        expense_id: str,
        *,
        title: Optional[str] = None,
        amount=None,
        category: Optional[str] = None,
        date=None,
    ) -> Expense:
        """Apply a partial update; fields left as None are unchanged.

        Raises:
            NotFoundError: If the expense doesn't exist
            ValidationError: If a provided field is invalid
        """
        index = self._index_of(expense_id)
        changes = {}
        if title is not None:
            changes["title"] = _validate_title(title)
        if amount is not None:
            changes["amount"] = _validate_amount(amount)
        if category is not None:
            changes["category"] = _normalize_category(category)
        if date is not None:
            changes["date"] = _validate_date(date)

        updated = replace(self._expenses[index], **changes)
        self._expenses[index] = updated
        logger.info("Updated expense %s: %s", expense_id, ", ".join(sorted(changes)) or "no changes")
        self._commit(
            EventKind.UPDATED,
            [updated],
            f"update of expense {expense_id}",
            lambda: self.db.save_expense(updated),
        )
        return updated

    def delete(self, expense_id: str) -> None:
        """Remove an expense permanently.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        index = self._index_of(expense_id)
        removed = self._expenses.pop(index)
        logger.info("Deleted expense %s", expense_id)
        self._commit(
            EventKind.DELETED,
            [removed],
            f"deletion of expense {expense_id}",
            lambda: self.db.delete_expense(expense_id),
        )

    def _set_archived(self, expense_id: str, archived: bool) -> Expense:
        index = self._index_of(expense_id)
        current = self._expenses[index]
        if current.is_archived == archived:
            return current

        updated = replace(current, is_archived=archived)
        self._expenses[index] = updated
        kind = EventKind.ARCHIVED if archived else EventKind.RESTORED
        logger.info("Expense %s %s", expense_id, kind.value)
        self._commit(
            kind,
            [updated],
            f"{kind.value} state of expense {expense_id}",
            lambda: self.db.save_expense(updated),
        )
        return updated

    def archive(self, expense_id: str) -> Expense:
        """Archive an expense. Archiving an archived expense is a no-op.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        return self._set_archived(expense_id, True)

    def restore(self, expense_id: str) -> Expense:
        """Move an archived expense back to the active list.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        return self._set_archived(expense_id, False)

    def _bulk_set_archived(self, predicate: Callable[[Expense], bool], archived: bool) -> list[Expense]:
        changed = []
        for index, expense in enumerate(self._expenses):
            if predicate(expense):
                updated = replace(expense, is_archived=archived)
                self._expenses[index] = updated
                changed.append(updated)
        return changed

    def restore_all(self) -> int:
        """Restore every archived expense. Returns how many were restored."""
        restored = self._bulk_set_archived(lambda expense: expense.is_archived, False)
        if restored:
            logger.info("Restored %d archived expenses", len(restored))
            self._commit(
                EventKind.RESTORED,
                restored,
                "restore of archived expenses",
                lambda: self.db.save_expenses(restored),
            )
        return len(restored)

    def auto_archive(self, now: Optional[date | datetime] = None) -> int:
        """Archive active expenses dated more than seven days before ``now``.

        Safe to call repeatedly: already archived expenses are skipped.

        Returns:
            Number of expenses archived by this call
        """
        cutoff = stats.archive_cutoff(self._now(now))
        archived = self._bulk_set_archived(
            lambda expense: not expense.is_archived and expense.date < cutoff, True
        )
        if archived:
            logger.info("Auto-archived %d expenses dated before %s", len(archived), cutoff)
            self._commit(
                EventKind.AUTO_ARCHIVED,
                archived,
                "auto-archive",
                lambda: self.db.save_expenses(archived),
            )
        return len(archived)

    # Queries

    def list_active(self) -> list[Expense]:
        """Active expenses, most recent first."""
        return stats.sort_by_date_desc(e for e in self._expenses if not e.is_archived)

    def list_archived(
        self,
        time_range: ArchiveRange = ArchiveRange.MONTH,
        now: Optional[date | datetime] = None,
    ) -> list[Expense]:
        """Archived expenses within the time range, most recent first."""
        start = stats.range_start(time_range, self._now(now))
        return stats.sort_by_date_desc(
            e
            for e in self._expenses
            if e.is_archived and (start is None or e.date >= start)
        )

    def category_breakdown(self, expenses: Iterable[Expense]) -> list[CategoryTotal]:
        """Summed amount per category, largest first."""
        return stats.category_breakdown(expenses)

    def total_and_daily_average(self, expenses: Sequence[Expense]) -> tuple[Decimal, Decimal]:
        return stats.total_and_daily_average(expenses)

    def spending_stats(self, expenses: Sequence[Expense]) -> SpendingStats:
        return stats.spending_stats(expenses)

    def pie_angles(self, expenses: Sequence[Expense]) -> list[PieSlice]:
        return stats.pie_angles(expenses)

    def weekly_timeline(
        self,
        expenses: Optional[Iterable[Expense]] = None,
        now: Optional[date | datetime] = None,
    ) -> list[Expense]:
        """Active expenses from the last seven days (defaults to the whole store)."""
        if expenses is None:
            expenses = self._expenses
        return stats.weekly_timeline(expenses, self._now(now))

    def daily_category_totals(self, expenses: Iterable[Expense]) -> list[DailyCategoryTotal]:
        return stats.daily_category_totals(expenses)
