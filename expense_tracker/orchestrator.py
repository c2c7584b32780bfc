"""
Main Orchestrator for Expense Tracker

Ties the components together:
- Storage backend (local files by default)
- Audit logger
- Expense store and settings store
- Monthly views that always use the STORED closing day

DESIGN DECISION: Month views go through ExpenseTracker, which reads the
closing day from the settings store. Callers never pass a closing day they
guessed themselves, so there is one source for it.
"""

from datetime import date
from pathlib import Path
from typing import Optional

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense
from expense_tracker.models.period import BillingPeriod
from expense_tracker.models.validation import ValidationResult
from expense_tracker.queries import MonthlySummary, summarize_month
from expense_tracker.services.storage import (
    DocumentStorageInterface,
    LocalFileStorage,
)
from expense_tracker.stores import ExpenseStore, SettingsStore
from expense_tracker.validation import ExpenseInput, ExpenseValidator


class ExpenseTracker:
    """
    Application facade over the two stores.

    The stores stay directly accessible for subscriptions and mutations.
    """

    def __init__(
        self,
        expenses: ExpenseStore,
        settings: SettingsStore,
        validator: Optional[ExpenseValidator] = None,
    ):
        self.expenses = expenses
        self.settings = settings
        self._validator = validator or ExpenseValidator()

    @property
    def closing_day(self) -> int:
        return self.settings.get().card_closing_day

    def validate(self, data: ExpenseInput, today: Optional[date] = None) -> ValidationResult:
        """Check input before saving it (errors block, warnings inform)."""
        return self._validator.validate(data, today=today)

    def expenses_for_month(self, year: int, month: int) -> tuple[Expense, ...]:
        return self.expenses.filter_by_period(year, month, self.closing_day)

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        return summarize_month(
            self.expenses.list(),
            BillingPeriod(year=year, month=month),
            self.closing_day,
        )

    def current_summary(self, today: Optional[date] = None) -> MonthlySummary:
        period = BillingPeriod.current(today)
        return self.monthly_summary(period.year, period.month)


def create_app_components(
    data_dir: Optional[Path] = None,
    storage: Optional[DocumentStorageInterface] = None,
    setup_logging: bool = True,
) -> ExpenseTracker:
    """
    Factory function to create all application components.

    Args:
        data_dir: Directory for the local file backend.
                  Defaults to the configured storage directory.
        storage: A ready backend; takes precedence over data_dir.
                 Pass InMemoryStorage() for a throwaway session.
        setup_logging: Configure structlog from the app settings.

    Returns:
        The wired ExpenseTracker
    """
    settings = get_settings()
    storage_settings = settings.storage

    if setup_logging:
        app_settings = settings.app
        configure_logging(app_settings.log_level, app_settings.json_logs)

    if storage is None:
        storage = LocalFileStorage(data_dir or storage_settings.data_dir)

    audit_logger = AuditLogger()

    expense_store = ExpenseStore(
        storage,
        storage_key=storage_settings.expenses_key,
        audit_logger=audit_logger,
    )
    settings_store = SettingsStore(
        storage,
        storage_key=storage_settings.settings_key,
        audit_logger=audit_logger,
    )

    return ExpenseTracker(
        expenses=expense_store,
        settings=settings_store,
        validator=ExpenseValidator(settings.app),
    )
