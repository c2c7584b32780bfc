"""
Billing period model.

A billing period is a calendar (year, month) pair. Months are 1-based.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BillingPeriod(BaseModel):
    """The calendar month an expense is reported under."""
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)

    @classmethod
    def containing(cls, day: date) -> "BillingPeriod":
        """The period whose calendar month contains the given date."""
        return cls(year=day.year, month=day.month)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "BillingPeriod":
        return cls.containing(today or date.today())

    def next(self) -> "BillingPeriod":
        if self.month == 12:
            return BillingPeriod(year=self.year + 1, month=1)
        return BillingPeriod(year=self.year, month=self.month + 1)

    def previous(self) -> "BillingPeriod":
        if self.month == 1:
            return BillingPeriod(year=self.year - 1, month=12)
        return BillingPeriod(year=self.year, month=self.month - 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
