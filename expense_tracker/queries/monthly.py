"""
Monthly Summaries

Deterministic aggregation over the expenses attributed to one billing
period: the numbers behind the month summary card, the category chart
and the expense list.
"""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from pydantic import BaseModel, Field

from expense_tracker.billing import filter_by_period
from expense_tracker.models.expense import (
    CATEGORY_LABELS,
    PAYMENT_METHOD_LABELS,
    Expense,
    ExpenseCategory,
    PaymentMethod,
)
from expense_tracker.models.period import BillingPeriod


CENT = Decimal("0.01")


def _money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


class CategoryTotal(BaseModel):
    """Total spent in one category within a period."""

    category: ExpenseCategory
    label: str
    total: Decimal
    percentage: Decimal = Field(
        ...,
        description="Share of the period total, 0-100 with one decimal"
    )


class PaymentMethodTotal(BaseModel):
    payment_method: PaymentMethod
    label: str
    total: Decimal
    count: int


class MonthlySummary(BaseModel):
    """Everything shown for one billing period."""

    period: BillingPeriod
    closing_day: int
    total: Decimal
    count: int
    by_category: list[CategoryTotal] = Field(default_factory=list)
    by_payment_method: list[PaymentMethodTotal] = Field(default_factory=list)
    expenses: list[Expense] = Field(
        default_factory=list,
        description="Expenses in the period, newest date first"
    )

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def sort_newest_first(expenses: Iterable[Expense]) -> list[Expense]:
    # sorted() is stable: same-day expenses keep their store order.
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)


def totals_by_category(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """Category totals, largest first; categories with no spend are omitted."""
    totals: dict[ExpenseCategory, Decimal] = defaultdict(Decimal)
    for expense in expenses:
        totals[expense.category] += expense.value

    grand_total = sum(totals.values(), Decimal("0"))
    result = []
    for category, total in totals.items():
        share = (total / grand_total * 100) if grand_total else Decimal("0")
        result.append(CategoryTotal(
            category=category,
            label=CATEGORY_LABELS[category],
            total=_money(total),
            percentage=share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP),
        ))

    result.sort(key=lambda item: item.total, reverse=True)
    return result


def totals_by_payment_method(expenses: Iterable[Expense]) -> list[PaymentMethodTotal]:
    totals: dict[PaymentMethod, Decimal] = defaultdict(Decimal)
    counts: dict[PaymentMethod, int] = defaultdict(int)
    for expense in expenses:
        totals[expense.payment_method] += expense.value
        counts[expense.payment_method] += 1

    return [
        PaymentMethodTotal(
            payment_method=method,
            label=PAYMENT_METHOD_LABELS[method],
            total=_money(totals[method]),
            count=counts[method],
        )
        for method in PaymentMethod
        if counts[method]
    ]


def summarize_month(
    expenses: Iterable[Expense],
    period: BillingPeriod,
    closing_day: int,
) -> MonthlySummary:
    """
    Summarize the expenses attributed to a billing period.

    Args:
        expenses: The full collection; attribution happens here
        period: Target billing period
        closing_day: Card closing day, 1-31

    Returns:
        MonthlySummary for the period (zero totals if nothing matches)
    """
    selected = filter_by_period(expenses, period.year, period.month, closing_day)
    total = sum((expense.value for expense in selected), Decimal("0"))

    return MonthlySummary(
        period=period,
        closing_day=closing_day,
        total=_money(total),
        count=len(selected),
        by_category=totals_by_category(selected),
        by_payment_method=totals_by_payment_method(selected),
        expenses=sort_newest_first(selected),
    )
