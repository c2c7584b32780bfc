"""Shared fixtures for the expense tracker tests."""

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from expense_tracker.config import get_settings
from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    PaymentMethod,
)
from expense_tracker.services.storage import InMemoryStorage, StorageReadError, StorageWriteError


def make_draft(
    day: str = "2025-01-10",
    method: str = "debit",
    value: str = "10.00",
    category: str = "mercado",
    subcategory: str = "comida",
    description: Optional[str] = None,
) -> ExpenseDraft:
    return ExpenseDraft(
        value=Decimal(value),
        payment_method=PaymentMethod(method),
        date=date.fromisoformat(day),
        category=ExpenseCategory(category),
        subcategory=subcategory,
        description=description,
    )


def make_expense(day: str, method: str = "debit", expense_id: str = "e1", **kwargs) -> Expense:
    return Expense.from_draft(make_draft(day, method, **kwargs), expense_id)


class FailingStorage(InMemoryStorage):
    """In-memory backend whose reads and/or writes always fail."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    def read(self, key):
        if self.fail_reads:
            raise StorageReadError(f"cannot read {key}")
        return super().read(key)

    def write(self, key, document):
        self.write_attempts += 1
        if self.fail_writes:
            raise StorageWriteError(f"disk full writing {key}")
        super().write(key, document)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from the developer's environment and the settings cache."""
    for name in (
        "EXPENSE_TRACKER_BILLING_DEFAULT_CARD_CLOSING_DAY",
        "EXPENSE_TRACKER_STORAGE_DATA_DIR",
        "EXPENSE_TRACKER_LOG_LEVEL",
        "EXPENSE_TRACKER_JSON_LOGS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
