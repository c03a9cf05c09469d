"""Commands for the active expense list."""

import click
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.formatting import expense_header, expense_row, format_amount, short_id
from expensetrack.cli.options import (
    CATEGORY_CHOICE,
    canonical_category,
    parse_date_or_exit,
    resolve_expense_or_exit,
)
from expensetrack.domain.errors import DomainError


@click.command("list")
@click.option("--verbose", "-v", is_flag=True, help="Show full IDs and creation times")
@click.pass_context
def list_expenses(ctx, verbose: bool):
    """List active expenses, most recent first.

    Expenses older than one week are archived before the list is shown.
    """
    service = ctx.obj["service"]

    archived_count = service.auto_archive()
    if archived_count:
        click.echo(f"Archived {archived_count} expense(s) older than one week.")

    expenses = service.list_active()
    if not expenses:
        click.echo("No expenses. Add your first expense with 'expensetrack add'.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    if verbose:
        click.echo("=" * 80)
        for expense in expenses:
            click.echo(f"\nExpense ID: {expense.id}")
            click.echo(f"  Title: {expense.title}")
            click.echo(f"  Date: {expense.date}")
            click.echo(f"  Amount: {format_amount(expense.amount)}")
            click.echo(f"  Category: {expense.category}")
            click.echo(f"  Created: {expense.created_at}")
            click.echo("-" * 80)
    else:
        click.echo("-" * 80)
        click.echo(expense_header())
        click.echo("-" * 80)
        for expense in expenses:
            click.echo(expense_row(expense))

    total, _ = service.total_and_daily_average(expenses)
    click.echo("-" * 80)
    click.echo(f"{'TOTAL':<10} {'':<12} {format_amount(total):>12}  Count: {len(expenses)}")


@click.command("edit")
@click.argument("expense_id")
@click.option("--title", help="New title")
@click.option("--amount", help="New amount")
@click.option("--category", type=CATEGORY_CHOICE, help="New category")
@click.option("--date", help="New date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.pass_context
def edit_expense(
    ctx,
    expense_id: str,
    title: str | None,
    amount: str | None,
    category: str | None,
    date: str | None,
):
    """Edit an expense.

    Updates only the fields that are provided. EXPENSE_ID may be the first
    characters of the ID shown by 'list'.

    Examples:
        expensetrack edit 3f2a1b9c --amount 4.20
        expensetrack edit 3f2a1b9c --category Travel --date 2025-08-01
    """
    service = ctx.obj["service"]
    full_id = resolve_expense_or_exit(ctx, service, expense_id)

    expense_date = None
    if date is not None:
        expense_date = parse_date_or_exit(ctx, date)

    try:
        expense = service.update(
            full_id,
            title=title,
            amount=amount,
            category=canonical_category(category) if category is not None else None,
            date=expense_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated expense {short_id(expense)}")
    click.echo(expense_row(expense))


@click.command("delete")
@click.argument("expense_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: str, yes: bool):
    """Delete an expense permanently.

    Examples:
        expensetrack delete 3f2a1b9c
    """
    service = ctx.obj["service"]
    full_id = resolve_expense_or_exit(ctx, service, expense_id)
    expense = service.get(full_id)

    if not yes and not click.confirm(f"Are you sure you want to delete '{expense.title}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete(full_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted expense {short_id(expense)}")


@click.command("archive")
@click.argument("expense_id")
@click.pass_context
def archive_expense(ctx, expense_id: str):
    """Move an expense to the archive."""
    service = ctx.obj["service"]
    full_id = resolve_expense_or_exit(ctx, service, expense_id)
    try:
        expense = service.archive(full_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Archived expense {short_id(expense)}")


def register_commands(cli):
    """Register expense list commands with main CLI."""
    cli.add_command(list_expenses)
    cli.add_command(edit_expense)
    cli.add_command(delete_expense)
    cli.add_command(archive_expense)
