"""Form validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidator,
    normalize_note,
    parse_amount,
)

__all__ = ["ExpenseValidator", "normalize_note", "parse_amount"]
