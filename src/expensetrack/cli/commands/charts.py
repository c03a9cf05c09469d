"""Chart commands: category pie and seven-day timeline."""

from collections import defaultdict

import click
from expensetrack.cli.formatting import format_amount

BAR_WIDTH = 40


def _display_pie(service, expenses) -> None:
    slices = service.pie_angles(expenses)
    click.echo("Categories")
    click.echo("-" * 60)
    if not slices:
        click.echo("Nothing to chart.")
        return

    click.echo(f"{'Category':<20} {'Start':>10} {'End':>10} {'Share':>10}")
    for pie_slice in slices:
        share = pie_slice.span / 360 * 100
        click.echo(
            f"{pie_slice.category:<20} {pie_slice.start_angle:>9.1f}° "
            f"{pie_slice.end_angle:>9.1f}° {share:>9.1f}%"
        )

    click.echo()
    for item in service.category_breakdown(expenses):
        click.echo(f"  {item.category:<20} {format_amount(item.total):>12}")


def _display_timeline(service) -> None:
    recent = service.weekly_timeline()
    cells = service.daily_category_totals(recent)
    click.echo("Timeline")
    click.echo("-" * 60)
    if not cells:
        click.echo("No expenses in the past 7 days.")
        return

    by_day = defaultdict(list)
    for cell in cells:
        by_day[cell.day].append(cell)

    peak = max(abs(sum(cell.total for cell in day_cells)) for day_cells in by_day.values())
    for day in sorted(by_day):
        day_cells = by_day[day]
        day_total = sum(cell.total for cell in day_cells)
        length = int(BAR_WIDTH * abs(day_total) / peak) if peak else 0
        click.echo(f"{day.strftime('%d %b'):<8} {'#' * length:<{BAR_WIDTH}} {format_amount(day_total):>12}")
        for cell in day_cells:
            click.echo(f"         {cell.category:<20} {format_amount(cell.total):>12}")
    click.echo("\nShowing expenses from the past 7 days")


@click.command("charts")
@click.option("--pie/--no-pie", default=True, help="Show the category pie breakdown")
@click.option("--timeline/--no-timeline", default=True, help="Show the seven-day timeline")
@click.pass_context
def show_charts(ctx, pie: bool, timeline: bool):
    """Chart active expenses by category and by day.

    Expenses older than one week are archived before charting.
    """
    service = ctx.obj["service"]

    archived_count = service.auto_archive()
    if archived_count:
        click.echo(f"Archived {archived_count} expense(s) older than one week.")
    expenses = service.list_active()

    if pie:
        _display_pie(service, expenses)
    if pie and timeline:
        click.echo()
    if timeline:
        _display_timeline(service)


def register_commands(cli):
    """Register chart commands with main CLI."""
    cli.add_command(show_charts)
