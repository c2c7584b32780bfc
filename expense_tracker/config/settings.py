"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The card closing day default lives here and nowhere else, so every
component that needs a fallback closing day reads the same value.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Durable document storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".expense_tracker",
        description="Directory holding one JSON document per storage key"
    )
    expenses_key: str = Field(
        default="personal-expenses",
        min_length=1,
        description="Storage key of the expense list document"
    )
    settings_key: str = Field(
        default="expense-settings",
        min_length=1,
        description="Storage key of the settings document"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand ~ so a value from .env behaves like a shell path."""
        return v.expanduser()


class BillingSettings(BaseSettings):
    """Billing-period configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_card_closing_day: int = Field(
        default=5,
        ge=1,
        le=31,
        description="Closing day used until the user saves their own"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level for application logs"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False renders for a console)"
    )

    # Validation thresholds
    max_expense_amount: Decimal = Field(
        default=Decimal("100000"),
        gt=0,
        description="Amounts above this are flagged for review"
    )
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future an expense date can be"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def billing(self) -> BillingSettings:
        return BillingSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every group that failed to load.
    Useful for startup checks.
    """
    results: dict[str, object] = {}
    settings = get_settings()

    for name in ("storage", "billing", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
