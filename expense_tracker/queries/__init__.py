"""Monthly query package."""

from expense_tracker.queries.monthly import (
    CategoryTotal,
    MonthlySummary,
    PaymentMethodTotal,
    sort_newest_first,
    summarize_month,
    totals_by_category,
    totals_by_payment_method,
)

__all__ = [
    "CategoryTotal",
    "MonthlySummary",
    "PaymentMethodTotal",
    "sort_newest_first",
    "summarize_month",
    "totals_by_category",
    "totals_by_payment_method",
]
