"""Billing-period attribution package."""

from expense_tracker.billing.period import (
    attributed_period,
    belongs_to_period,
    check_closing_day,
    filter_by_period,
)

__all__ = [
    "attributed_period",
    "belongs_to_period",
    "check_closing_day",
    "filter_by_period",
]
