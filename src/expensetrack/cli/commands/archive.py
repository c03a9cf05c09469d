"""Archive browsing and restore commands."""

import click
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.formatting import expense_header, expense_row, format_amount, short_id
from expensetrack.cli.options import resolve_expense_or_exit
from expensetrack.domain.entities import ArchiveRange
from expensetrack.domain.errors import DomainError

RANGE_CHOICE = click.Choice(["week", "month", "year", "all"], case_sensitive=False)


def _display_stats(stats) -> None:
    click.echo("Spending Analysis")
    click.echo(
        f"  Total: {format_amount(stats.total)}   "
        f"Daily Avg: {format_amount(stats.daily_average)}   "
        f"Transactions: {stats.count}"
    )
    if stats.breakdown:
        click.echo("  By Category:")
        for item in stats.breakdown:
            click.echo(f"    {item.category:<20} {format_amount(item.total):>12}")


@click.command("archived")
@click.option(
    "--range",
    "time_range",
    type=RANGE_CHOICE,
    default="month",
    show_default=True,
    help="How far back to show archived expenses",
)
@click.pass_context
def list_archived(ctx, time_range: str):
    """Show archived expenses with spending statistics."""
    service = ctx.obj["service"]
    selected = ArchiveRange.parse(time_range)

    expenses = service.list_archived(selected)
    click.echo(f"Archived Expenses ({selected.value})")
    _display_stats(service.spending_stats(expenses))

    if not expenses:
        click.echo("\nNo archived expenses. Expenses older than 1 week are automatically archived.")
        return

    click.echo("-" * 80)
    click.echo(expense_header())
    click.echo("-" * 80)
    for expense in expenses:
        click.echo(expense_row(expense))


@click.command("restore")
@click.argument("expense_id", required=False)
@click.option("--all", "restore_all", is_flag=True, help="Restore every archived expense")
@click.pass_context
def restore_expense(ctx, expense_id: str | None, restore_all: bool):
    """Move archived expenses back to the active list.

    Examples:
        expensetrack restore 3f2a1b9c
        expensetrack restore --all
    """
    service = ctx.obj["service"]

    if restore_all == (expense_id is not None):
        click.echo("Error: Give either an EXPENSE_ID or --all.", err=True)
        ctx.exit(1)

    if restore_all:
        count = service.restore_all()
        click.echo(f"Restored {count} expense(s)")
        return

    full_id = resolve_expense_or_exit(ctx, service, expense_id)
    try:
        expense = service.restore(full_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Restored expense {short_id(expense)}")


def register_commands(cli):
    """Register archive commands with main CLI."""
    cli.add_command(list_archived)
    cli.add_command(restore_expense)
