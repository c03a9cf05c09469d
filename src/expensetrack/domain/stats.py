"""Aggregations over sequences of expenses.

Everything here is a pure function of its arguments; ExpenseService exposes
the same operations as methods for callers that only hold the store.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from expensetrack.domain.entities import (
    ArchiveRange,
    CategoryTotal,
    DailyCategoryTotal,
    Expense,
    PieSlice,
    SpendingStats,
)
from expensetrack.utils.date_parser import as_date

FULL_CIRCLE = 360.0
ACTIVE_WINDOW = timedelta(days=7)


def archive_cutoff(now: date | datetime) -> date:
    """First day still considered recent; anything earlier gets archived."""
    return as_date(now) - ACTIVE_WINDOW


def range_start(time_range: ArchiveRange, now: date | datetime) -> Optional[date]:
    """Earliest date included by an archive range, or None for all time."""
    window = time_range.window
    if window is None:
        return None
    return as_date(now) - window


def sort_by_date_desc(expenses: Iterable[Expense]) -> list[Expense]:
    """Most recent first; equal dates keep their incoming order."""
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)


def category_breakdown(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """Sum amounts per category.

    Sorted by total descending, then by category name, so identical input
    always produces identical output.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for expense in expenses:
        totals[expense.category] += expense.amount
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryTotal(category=category, total=total) for category, total in ordered]


def total_and_daily_average(expenses: Sequence[Expense]) -> tuple[Decimal, Decimal]:
    """Return the total and the average per distinct calendar day."""
    if not expenses:
        return Decimal("0"), Decimal("0")
    total = sum((expense.amount for expense in expenses), Decimal("0"))
    days = len({expense.date for expense in expenses})
    return total, total / max(days, 1)


def spending_stats(expenses: Sequence[Expense]) -> SpendingStats:
    """Build the archive statistics panel."""
    total, daily_average = total_and_daily_average(expenses)
    return SpendingStats(
        total=total,
        daily_average=daily_average,
        count=len(expenses),
        breakdown=tuple(category_breakdown(expenses)),
    )


def pie_angles(expenses: Sequence[Expense]) -> list[PieSlice]:
    """Partition the circle by each expense's share of the total.

    Slices follow the input order and abut: each starts where the previous
    one ended. The last slice is pinned to 360 so accumulated float error
    does not leave a gap. A zero total yields no slices.
    """
    total = sum((expense.amount for expense in expenses), Decimal("0"))
    if total == 0:
        return []

    slices = []
    current = 0.0
    last_index = len(expenses) - 1
    for index, expense in enumerate(expenses):
        span = FULL_CIRCLE * float(expense.amount / total)
        end = FULL_CIRCLE if index == last_index else current + span
        slices.append(PieSlice(category=expense.category, start_angle=current, end_angle=end))
        current = end
    return slices


def slice_at_angle(slices: Sequence[PieSlice], angle: float) -> Optional[str]:
    """Category of the slice containing ``angle`` (degrees), if any."""
    angle = angle % FULL_CIRCLE
    for pie_slice in slices:
        if pie_slice.start_angle <= angle < pie_slice.end_angle:
            return pie_slice.category
    return None


def weekly_timeline(expenses: Iterable[Expense], now: date | datetime) -> list[Expense]:
    """Active expenses dated within the last seven days of ``now``."""
    cutoff = archive_cutoff(now)
    return [
        expense
        for expense in expenses
        if not expense.is_archived and expense.date >= cutoff
    ]


def daily_category_totals(expenses: Iterable[Expense]) -> list[DailyCategoryTotal]:
    """Per-day, per-category sums for the timeline bar chart."""
    totals: dict[tuple[date, str], Decimal] = defaultdict(Decimal)
    for expense in expenses:
        totals[(expense.date, expense.category)] += expense.amount
    return [
        DailyCategoryTotal(day=day, category=category, total=total)
        for (day, category), total in sorted(totals.items())
    ]
