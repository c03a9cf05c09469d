"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses name the failure kind; all of them are ValueErrors so
    parsing and domain failures can be caught together.
    """


class ValidationError(DomainError):
    """Invalid input rejected before any mutation."""


class NotFoundError(DomainError):
    """Referenced expense does not exist (usually a stale reference)."""


class PersistenceError(DomainError):
    """Durable save failed; the in-memory state is still applied."""


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def empty_title() -> str:
    """Return message for a blank title."""
    return "Title must not be empty"


def invalid_amount(amount: object) -> str:
    """Return message for an amount that is not a finite number."""
    return f"Amount '{amount}' is not a finite number"


def persistence_failed(action: str, error: Exception) -> str:
    """Return message when the repository could not store a change."""
    return f"Failed to persist {action}: {error}"
