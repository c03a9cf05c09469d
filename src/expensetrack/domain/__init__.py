"""Domain layer for expensetrack application."""

from expensetrack.domain.expense import ExpenseService
from expensetrack.domain.entities import CATEGORIES, ArchiveRange, Expense

__all__ = [
    "ExpenseService",
    "CATEGORIES",
    "ArchiveRange",
    "Expense",
]
