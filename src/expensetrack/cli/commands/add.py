"""Add expense command."""

import click
from datetime import date as date_type
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.formatting import format_amount, short_id
from expensetrack.cli.options import CATEGORY_CHOICE, canonical_category, parse_date_or_exit
from expensetrack.domain.entities import DEFAULT_CATEGORY
from expensetrack.domain.errors import DomainError


@click.command("add")
@click.option("--title", required=True, help="What the money was spent on")
@click.option("--amount", required=True, help="Amount (e.g., 12.50; negative for a refund)")
@click.option(
    "--category",
    type=CATEGORY_CHOICE,
    default=DEFAULT_CATEGORY,
    show_default=True,
    help="Expense category",
)
@click.option(
    "--date",
    help="Expense date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today",
)
@click.pass_context
def add_expense(ctx, title: str, amount: str, category: str, date: str | None):
    """Add an expense.

    Examples:
        expensetrack add --title Coffee --amount 3.50
        expensetrack add --title Taxi --amount 15 --category Transport --date yesterday
    """
    service = ctx.obj["service"]

    expense_date = date_type.today() if date is None else parse_date_or_exit(ctx, date)

    try:
        expense = service.add(
            title=title,
            amount=amount,
            category=canonical_category(category),
            date=expense_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created expense {short_id(expense)}")
    click.echo(f"  Title: {expense.title}")
    click.echo(f"  Amount: {format_amount(expense.amount)}")
    click.echo(f"  Category: {expense.category}")
    click.echo(f"  Date: {expense.date}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_expense)
