"""Utility for resolving expense references typed by the user."""

from expensetrack.domain.errors import NotFoundError, ValidationError, expense_not_found


def resolve_expense(expense_service, reference: str) -> str:
    """Resolve a full expense ID or a unique ID prefix to the full ID.

    Args:
        expense_service: ExpenseService instance
        reference: Full ID or leading characters of one

    Returns:
        Expense ID

    Raises:
        NotFoundError: If no expense matches
        ValidationError: If the prefix matches more than one expense
    """
    reference = reference.strip().lower()
    if not reference:
        raise ValidationError("Expense ID must not be empty")

    matches = [
        expense.id
        for expense in expense_service.all_expenses()
        if expense.id.startswith(reference)
    ]
    if reference in matches:
        return reference
    if not matches:
        raise NotFoundError(expense_not_found(reference))
    if len(matches) > 1:
        raise ValidationError(
            f"Expense ID '{reference}' is ambiguous ({len(matches)} matches); type more characters"
        )
    return matches[0]
