"""Input validation package."""

from expense_tracker.validation.validator import (
    ExpenseInput,
    ExpenseValidator,
    InvalidExpenseError,
    parse_expense_draft,
)

__all__ = [
    "ExpenseInput",
    "ExpenseValidator",
    "InvalidExpenseError",
    "parse_expense_draft",
]
