"""Main CLI entry point."""

import logging

import click
from expensetrack.cli.error_handling import report_persistence_failure
from expensetrack.database.factories import create_sqlite_database
from expensetrack.domain.errors import PersistenceError
from expensetrack.domain.expense import ExpenseService
from expensetrack.utils.logger import set_level

# Import and register all commands at module level
from expensetrack.cli.commands import add, archive, charts, expense


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides EXPENSETRACK_DB_PATH environment variable)",
    envvar="EXPENSETRACK_DB_PATH",
)
@click.option("--verbose", is_flag=True, help="Log store activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Expensetrack - personal expense tracking.

    Record dated, categorized expenses; anything older than a week is
    archived automatically when the list is shown.
    """
    ctx.ensure_object(dict)
    if verbose:
        set_level(logging.INFO)

    # Open the store only when actually running a command (not for --help);
    # callers may pass a ready service in ctx.obj
    if ctx.invoked_subcommand is not None and "service" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        try:
            service = ExpenseService(db)
        except PersistenceError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        service.subscribe(report_persistence_failure)
        ctx.obj["db"] = db
        ctx.obj["service"] = service


# Register all commands
add.register_commands(cli)
expense.register_commands(cli)
archive.register_commands(cli)
charts.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
