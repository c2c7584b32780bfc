"""
Core Data Models for Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Reject malformed input (bad dates, non-positive amounts) at the boundary
2. Be immutable, so snapshots can be shared between subscribers
3. Round-trip through the persisted JSON documents unchanged

DESIGN DECISION: Persisted documents keep camelCase field names
(paymentMethod, cardClosingDay). Python code uses snake_case; the alias
generator translates between the two.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
)
from pydantic.alias_generators import to_camel


# Amounts are stored as JSON numbers (binary floats). Fifteen significant
# digits is the most a float reproduces exactly.
MAX_VALUE_DIGITS = 15
VALUE_DECIMAL_PLACES = 2
MAX_EXPENSE_VALUE = Decimal("9999999999999.99")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentMethod(str, Enum):
    """How an expense was paid. Only credit is subject to the closing day."""
    CREDIT = "credit"
    DEBIT = "debit"


class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    The set is closed; subcategories are keyed by these values.
    """
    SAUDE = "saude"
    MORADIA = "moradia"
    MERCADO = "mercado"
    TRANSPORTE = "transporte"
    LAZER = "lazer"


# =============================================================================
# DISPLAY CATALOGUE
# =============================================================================

CATEGORY_LABELS: dict[ExpenseCategory, str] = {
    ExpenseCategory.SAUDE: "Saúde",
    ExpenseCategory.MORADIA: "Moradia",
    ExpenseCategory.MERCADO: "Mercado",
    ExpenseCategory.TRANSPORTE: "Transporte",
    ExpenseCategory.LAZER: "Lazer",
}

SUBCATEGORIES: dict[ExpenseCategory, dict[str, str]] = {
    ExpenseCategory.SAUDE: {
        "plano-saude": "Plano de saúde",
        "remedios": "Remédios",
        "cuidados-pessoais": "Cuidados Pessoais",
    },
    ExpenseCategory.TRANSPORTE: {
        "uber-99": "99/Uber",
        "gasolina": "Gasolina",
        "manutencao": "Manutenção do Carro",
        "seguro": "Seguro",
        "taxas": "Taxas",
    },
    ExpenseCategory.MORADIA: {
        "aluguel": "Aluguel",
        "condominio": "Condomínio",
        "faxina": "Faxina",
        "gas": "Gás",
        "luz": "Luz",
        "internet": "Internet",
        "outros": "Outros",
    },
    ExpenseCategory.LAZER: {
        "bar": "Bar",
        "restaurante": "Restaurante",
        "show": "Show",
        "viagem": "Viagem",
    },
    ExpenseCategory.MERCADO: {
        "comida": "Comida",
        "alcool": "Álcool",
        "outros": "Outros",
    },
}

PAYMENT_METHOD_LABELS: dict[PaymentMethod, str] = {
    PaymentMethod.CREDIT: "Crédito",
    PaymentMethod.DEBIT: "Débito",
}


def subcategory_label(category: ExpenseCategory, subcategory: str) -> str:
    """Display label for a subcategory, or the raw key when it is unknown."""
    return SUBCATEGORIES.get(category, {}).get(subcategory, subcategory)


# =============================================================================
# CORE EXPENSE MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    An expense as entered by a user or an importer, before it has an id.

    This is the input boundary: anything that cannot be parsed into a
    draft never reaches the store.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        extra="ignore",
    )

    value: Decimal = Field(
        ...,
        gt=0,
        max_digits=MAX_VALUE_DIGITS,
        decimal_places=VALUE_DECIMAL_PLACES,
        description="Amount spent (must be positive, at most two decimals)"
    )
    payment_method: PaymentMethod = Field(
        ...,
        description="Credit or debit"
    )
    date: datetime.date = Field(
        ...,
        description="Transaction date (yyyy-mm-dd, no time component)"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    subcategory: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Subcategory key within the category"
    )
    description: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Optional free text"
    )

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: Decimal) -> float:
        # Stored documents carry the amount as a JSON number.
        return float(value)

    def to_document(self) -> dict:
        """Convert to the camelCase dict written to storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Expense(ExpenseDraft):
    """
    A stored expense.

    Identity is the opaque string id assigned by the store on add.
    Updates replace every other field but never the id.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique expense ID"
    )

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, expense_id: str) -> "Expense":
        return cls(id=expense_id, **draft.model_dump())

    def to_draft(self) -> ExpenseDraft:
        return ExpenseDraft(**self.model_dump(exclude={"id"}))


class ExpenseSettings(BaseModel):
    """User settings that govern billing-period attribution."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    card_closing_day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of month after which credit expenses roll to next bill"
    )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
