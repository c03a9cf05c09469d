"""Helpers for turning CLI option strings into domain values."""

from datetime import date

import click

from expensetrack.domain.entities import CATEGORIES
from expensetrack.utils.date_parser import parse_date
from expensetrack.utils.expense_resolver import resolve_expense
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.domain.errors import DomainError

CATEGORY_CHOICE = click.Choice(CATEGORIES, case_sensitive=False)


def parse_date_or_exit(ctx: click.Context, value: str) -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def resolve_expense_or_exit(ctx: click.Context, expense_service, reference: str) -> str:
    """Resolve an expense ID or prefix, or exit with a CLI error."""
    try:
        return resolve_expense(expense_service, reference)
    except DomainError as e:
        handle_domain_error(ctx, e)


def canonical_category(category: str) -> str:
    """Return the label from CATEGORIES matching ``category`` case-insensitively."""
    for label in CATEGORIES:
        if label.lower() == category.lower():
            return label
    return category
