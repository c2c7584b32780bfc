"""
Two-Stage Validation Pipeline

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Type checking, required fields
- ISO date format (yyyy-mm-dd), positive amount
- Known category and payment method
- Failing this stage rejects the input

STAGE 2 - SEMANTIC VALIDATION:
- Subcategory not listed for the category
- Date too far in the future
- Suspiciously large amount
- These only produce warnings; importers that default
  subcategories must not be blocked

IMPORTANT: Validation NEVER silently fixes issues.
"""

from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.models.expense import (
    SUBCATEGORIES,
    Expense,
    ExpenseDraft,
)
from expense_tracker.models.validation import ValidationIssue, ValidationResult


ExpenseInput = Union[ExpenseDraft, Mapping[str, Any]]


class InvalidExpenseError(ValueError):
    """Raised when input cannot be turned into an ExpenseDraft."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        details = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
        super().__init__(f"Invalid expense: {details}")

    @property
    def result(self) -> ValidationResult:
        return ValidationResult(
            schema_valid=False,
            semantic_valid=False,
            issues=self.issues,
        )


def _issues_from_pydantic(error: PydanticValidationError) -> list[ValidationIssue]:
    issues = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"]) or "expense"
        issues.append(ValidationIssue(
            field=field,
            issue_type=err["type"],
            message=err["msg"],
            severity="error",
        ))
    return issues


def parse_expense_draft(data: ExpenseInput) -> ExpenseDraft:
    """
    Turn raw input into an ExpenseDraft.

    Drafts pass through unchanged; a stored Expense is stripped of its id;
    mappings (camelCase or snake_case keys) are validated. An 'id' key in a
    mapping is ignored.

    Raises:
        InvalidExpenseError: If the input does not describe a valid expense
    """
    if isinstance(data, Expense):
        return data.to_draft()
    if isinstance(data, ExpenseDraft):
        return data
    if not isinstance(data, Mapping):
        raise InvalidExpenseError([ValidationIssue(
            field="expense",
            issue_type="invalid_type",
            message=f"Expected a mapping, got {type(data).__name__}",
            severity="error",
        )])

    try:
        return ExpenseDraft.model_validate(dict(data))
    except PydanticValidationError as e:
        raise InvalidExpenseError(_issues_from_pydantic(e)) from e


class ExpenseValidator:
    """
    Validates raw expense input through a two-stage pipeline.

    Unlike parse_expense_draft, validate() never raises: it reports.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def _validate_semantic(
        self,
        draft: ExpenseDraft,
        today: date,
    ) -> list[ValidationIssue]:
        issues = []

        known = SUBCATEGORIES.get(draft.category, {})
        if draft.subcategory not in known:
            issues.append(ValidationIssue(
                field="subcategory",
                issue_type="unknown_subcategory",
                message=(
                    f"Subcategory '{draft.subcategory}' is not listed "
                    f"for category '{draft.category.value}'"
                ),
                severity="warning",
                suggested_fix=f"Use one of: {', '.join(sorted(known))}",
            ))

        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if draft.date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Expense date ({draft.date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        if draft.value > self._settings.max_expense_amount:
            issues.append(ValidationIssue(
                field="value",
                issue_type="suspicious_value",
                message=f"Amount ({draft.value:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        return issues

    def validate(
        self,
        data: ExpenseInput,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Run the full validation pipeline.

        Stage 2 only runs when stage 1 produced a draft.
        """
        try:
            draft = parse_expense_draft(data)
        except InvalidExpenseError as e:
            return e.result

        semantic_issues = self._validate_semantic(draft, today or date.today())
        return ValidationResult(
            schema_valid=True,
            semantic_valid=not semantic_issues,
            issues=semantic_issues,
        )
