"""Configuration package."""

from expense_tracker.config.settings import (
    AppSettings,
    BillingSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BillingSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
