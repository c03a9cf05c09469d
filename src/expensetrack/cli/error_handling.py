"""CLI error handling helpers."""

import click

from expensetrack.domain.entities import StoreEvent
from expensetrack.domain.errors import DomainError, NotFoundError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    A missing expense is a stale reference, so it is shown as a warning.
    """
    if isinstance(error, NotFoundError):
        click.echo(f"Warning: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_persistence_failure(event: StoreEvent) -> None:
    """Store listener that tells the user when a change was not saved."""
    if event.persistence_error is not None:
        click.echo(
            f"Warning: change applied but not saved ({event.persistence_error})",
            err=True,
        )
