"""Shared rendering helpers for CLI output."""

from decimal import Decimal

from expensetrack.domain.entities import Expense

SHORT_ID_LENGTH = 8


def format_amount(amount: Decimal) -> str:
    """Format an amount; credits (negative amounts) get a leading '+'."""
    if amount < 0:
        return f"+${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def short_id(expense: Expense) -> str:
    return expense.id[:SHORT_ID_LENGTH]


def expense_header() -> str:
    return f"{'ID':<10} {'Date':<12} {'Amount':>12}  {'Category':<15} {'Title':<30}"


def expense_row(expense: Expense) -> str:
    title = expense.title[:30]
    return (
        f"{short_id(expense):<10} {str(expense.date):<12} {format_amount(expense.amount):>12}  "
        f"{expense.category:<15} {title:<30}"
    )
