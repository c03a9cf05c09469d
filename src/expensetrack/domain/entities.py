"""Domain model entities for expensetrack.

These are pure data classes representing business concepts, independent of
database schema. The store hands them out and replaces them on every change,
so a caller holding an Expense always sees a consistent snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from expensetrack.domain.errors import ValidationError

CATEGORIES = (
    "Food",
    "Utilities",
    "Shopping",
    "Healthcare",
    "Travel",
    "Transport",
    "Housing",
    "Entertainment",
    "Other",
)

DEFAULT_CATEGORY = "Food"


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: str
    title: str
    amount: Decimal
    category: str
    date: date
    created_at: datetime
    is_archived: bool = False

    @property
    def is_credit(self) -> bool:
        """Negative amounts are refunds or credits."""
        return self.amount < 0


class ArchiveRange(Enum):
    """Time windows offered when browsing archived expenses."""

    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"
    ALL = "All Time"

    @property
    def window(self) -> Optional[relativedelta]:
        """Calendar offset covered by the range, or None for all time."""
        if self is ArchiveRange.WEEK:
            return relativedelta(days=7)
        if self is ArchiveRange.MONTH:
            return relativedelta(months=1)
        if self is ArchiveRange.YEAR:
            return relativedelta(years=1)
        return None

    @classmethod
    def parse(cls, text: str) -> "ArchiveRange":
        """Parse a range from its label or name (case-insensitive).

        Raises:
            ValidationError: If the text does not name a range
        """
        normalized = text.strip().lower()
        for member in cls:
            if normalized in (member.value.lower(), member.name.lower()):
                return member
        if normalized in ("all", "alltime", "all-time"):
            return cls.ALL
        labels = ", ".join(member.value for member in cls)
        raise ValidationError(f"Unknown archive range '{text}'. Supported ranges: {labels}")


class EventKind(Enum):
    """Kinds of change announced to store subscribers."""

    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    ARCHIVED = "archived"
    RESTORED = "restored"
    AUTO_ARCHIVED = "auto_archived"


@dataclass(frozen=True)
class StoreEvent:
    """Change notification emitted after every successful mutation.

    ``persistence_error`` is set when the change is applied in memory but
    could not be saved durably.
    """

    kind: EventKind
    expense_ids: tuple[str, ...]
    persistence_error: Optional[Exception] = None

    @property
    def persisted(self) -> bool:
        return self.persistence_error is None


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""

    category: str
    total: Decimal


@dataclass(frozen=True)
class SpendingStats:
    """Statistics panel for a set of expenses."""

    total: Decimal
    daily_average: Decimal
    count: int
    breakdown: tuple[CategoryTotal, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PieSlice:
    """One slice of the pie chart, angles in degrees."""

    category: str
    start_angle: float
    end_angle: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class DailyCategoryTotal:
    """Bar chart cell: amount spent on one day in one category."""

    day: date
    category: str
    total: Decimal
