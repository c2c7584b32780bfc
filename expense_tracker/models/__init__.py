"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    CATEGORY_LABELS,
    MAX_EXPENSE_VALUE,
    PAYMENT_METHOD_LABELS,
    SUBCATEGORIES,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseSettings,
    PaymentMethod,
    subcategory_label,
)
from expense_tracker.models.period import BillingPeriod
from expense_tracker.models.validation import ValidationIssue, ValidationResult
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CATEGORY_LABELS",
    "MAX_EXPENSE_VALUE",
    "PAYMENT_METHOD_LABELS",
    "SUBCATEGORIES",
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "ExpenseSettings",
    "PaymentMethod",
    "subcategory_label",
    # Billing
    "BillingPeriod",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
