"""Observable, persisted stores for expenses and settings."""

from expense_tracker.stores.expense_store import (
    DEFAULT_EXPENSES_KEY,
    ExpenseListener,
    ExpenseStore,
    Unsubscribe,
)
from expense_tracker.stores.settings_store import (
    DEFAULT_SETTINGS_KEY,
    SettingsListener,
    SettingsStore,
    default_expense_settings,
)

__all__ = [
    "DEFAULT_EXPENSES_KEY",
    "DEFAULT_SETTINGS_KEY",
    "ExpenseListener",
    "ExpenseStore",
    "SettingsListener",
    "SettingsStore",
    "Unsubscribe",
    "default_expense_settings",
]
