"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain Expense stays
independent of the table layout.
"""

from decimal import Decimal

from expensetrack.domain import entities as domain
from expensetrack.database.models import Expense as ORMExpense


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        title=orm_expense.title,
        amount=Decimal(orm_expense.amount),
        category=orm_expense.category,
        date=orm_expense.date,
        created_at=orm_expense.created_at,
        is_archived=bool(orm_expense.is_archived),
    )


def expense_to_orm(expense: domain.Expense, orm_expense: ORMExpense | None = None) -> ORMExpense:
    """Copy a domain Expense onto a SQLAlchemy row, creating one if needed."""
    if orm_expense is None:
        orm_expense = ORMExpense(id=expense.id)
    orm_expense.title = expense.title
    orm_expense.amount = str(expense.amount)
    orm_expense.category = expense.category
    orm_expense.date = expense.date
    orm_expense.is_archived = expense.is_archived
    orm_expense.created_at = expense.created_at
    return orm_expense
