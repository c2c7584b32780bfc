"""
Billing-Period Attribution

Maps an expense to the calendar month it is reported under.

Debit expenses belong to the month of their own date. Credit expenses
made AFTER the card closing day land on the next month's bill; an
expense made ON the closing day stays in its own month. The comparison
is on raw day numbers, so a closing day larger than the month length
(31 in February) simply never rolls anything over.

Filtering always scans the whole collection. There is no index to keep
in sync with the store.
"""

from typing import Iterable

from expense_tracker.models.expense import Expense, PaymentMethod
from expense_tracker.models.period import BillingPeriod


MIN_CLOSING_DAY = 1
MAX_CLOSING_DAY = 31


def check_closing_day(closing_day: int) -> int:
    """Raise ValueError unless closing_day is a day-of-month (1-31)."""
    if isinstance(closing_day, bool) or not isinstance(closing_day, int):
        raise ValueError(f"Closing day must be an integer, got {closing_day!r}")
    if not MIN_CLOSING_DAY <= closing_day <= MAX_CLOSING_DAY:
        raise ValueError(
            f"Closing day must be between {MIN_CLOSING_DAY} and "
            f"{MAX_CLOSING_DAY}, got {closing_day}"
        )
    return closing_day


def _attributed_month(expense: Expense, closing_day: int) -> tuple[int, int]:
    # Plain tuple: a credit expense on 9999-12-31 rolls into year 10000,
    # which no BillingPeriod can hold.
    year, month = expense.date.year, expense.date.month
    if (
        expense.payment_method == PaymentMethod.CREDIT
        and expense.date.day > closing_day
    ):
        if month == 12:
            return year + 1, 1
        return year, month + 1
    return year, month


def attributed_period(expense: Expense, closing_day: int) -> BillingPeriod:
    """
    Return the billing period an expense is reported under.

    Raises:
        ValueError: If closing_day is out of range, or the expense rolls
            past December 9999
    """
    check_closing_day(closing_day)
    year, month = _attributed_month(expense, closing_day)
    return BillingPeriod(year=year, month=month)


def belongs_to_period(
    expense: Expense,
    period: BillingPeriod,
    closing_day: int,
) -> bool:
    check_closing_day(closing_day)
    return _attributed_month(expense, closing_day) == (period.year, period.month)


def filter_by_period(
    expenses: Iterable[Expense],
    year: int,
    month: int,
    closing_day: int,
) -> tuple[Expense, ...]:
    """
    Select the expenses attributed to (year, month).

    Args:
        expenses: The full collection to scan
        year: Target year
        month: Target month, 1-12
        closing_day: Card closing day, 1-31

    Returns:
        Matching expenses, in collection order

    Raises:
        ValueError: If month or closing_day is out of range
    """
    check_closing_day(closing_day)
    target = BillingPeriod(year=year, month=month)
    return tuple(
        expense for expense in expenses
        if belongs_to_period(expense, target, closing_day)
    )
