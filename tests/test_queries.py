"""Tests for monthly summaries."""

from decimal import Decimal

import pytest

from expense_tracker.models.expense import ExpenseCategory, PaymentMethod
from expense_tracker.models.period import BillingPeriod
from expense_tracker.queries import (
    sort_newest_first,
    summarize_month,
    totals_by_category,
    totals_by_payment_method,
)

from conftest import make_expense


@pytest.fixture
def expenses():
    return [
        make_expense("2025-01-03", "debit", expense_id="groceries",
                     value="60.00", category="mercado", subcategory="comida"),
        make_expense("2025-01-05", "credit", expense_id="pharmacy",
                     value="15.00", category="saude", subcategory="remedios"),
        make_expense("2025-01-20", "debit", expense_id="rent",
                     value="25.00", category="moradia", subcategory="aluguel"),
        make_expense("2025-01-20", "credit", expense_id="bar",
                     value="40.00", category="lazer", subcategory="bar"),
        make_expense("2024-12-28", "credit", expense_id="december-fuel",
                     value="0.10", category="transporte", subcategory="gasolina"),
    ]


class TestSummarizeMonth:

    def test_january_with_closing_day_five(self, expenses):
        summary = summarize_month(expenses, BillingPeriod(year=2025, month=1), 5)

        assert summary.count == 4
        assert summary.total == Decimal("100.10")
        assert summary.closing_day == 5
        assert {e.id for e in summary.expenses} == {
            "groceries", "pharmacy", "rent", "december-fuel",
        }

    def test_credit_after_closing_lands_in_february(self, expenses):
        summary = summarize_month(expenses, BillingPeriod(year=2025, month=2), 5)
        assert [e.id for e in summary.expenses] == ["bar"]
        assert summary.total == Decimal("40.00")

    def test_empty_period(self, expenses):
        summary = summarize_month(expenses, BillingPeriod(year=2026, month=3), 5)
        assert summary.is_empty
        assert summary.total == Decimal("0.00")
        assert summary.by_category == []
        assert summary.by_payment_method == []

    def test_expenses_sorted_newest_first(self, expenses):
        summary = summarize_month(expenses, BillingPeriod(year=2025, month=1), 5)
        assert [e.id for e in summary.expenses] == [
            "rent", "pharmacy", "groceries", "december-fuel",
        ]


class TestAggregations:

    def test_totals_by_category_largest_first(self, expenses):
        totals = totals_by_category(expenses[:4])
        assert [t.category for t in totals] == [
            ExpenseCategory.MERCADO,
            ExpenseCategory.LAZER,
            ExpenseCategory.MORADIA,
            ExpenseCategory.SAUDE,
        ]
        assert totals[0].label == "Mercado"
        assert totals[0].total == Decimal("60.00")
        assert totals[0].percentage == Decimal("42.9")

    def test_totals_by_category_sums_same_category(self):
        totals = totals_by_category([
            make_expense("2025-01-01", value="1.10", category="lazer", subcategory="bar"),
            make_expense("2025-01-02", value="2.20", category="lazer", subcategory="show"),
        ])
        assert len(totals) == 1
        assert totals[0].total == Decimal("3.30")
        assert totals[0].percentage == Decimal("100.0")

    def test_totals_by_payment_method(self, expenses):
        totals = totals_by_payment_method(expenses[:4])
        assert [(t.payment_method, t.total, t.count) for t in totals] == [
            (PaymentMethod.CREDIT, Decimal("55.00"), 2),
            (PaymentMethod.DEBIT, Decimal("85.00"), 2),
        ]
        assert totals[0].label == "Crédito"

    def test_sort_is_stable_for_same_day(self):
        first = make_expense("2025-01-20", expense_id="first")
        second = make_expense("2025-01-20", expense_id="second")
        older = make_expense("2025-01-01", expense_id="older")
        assert [e.id for e in sort_newest_first([first, older, second])] == [
            "first", "second", "older",
        ]
