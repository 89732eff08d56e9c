"""
Pydantic schemas for budget operations.

spent is never accepted from callers. It is derived by the
engine and rebuilt by recalculation.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from personal_ledger.models.enums import BudgetPeriod


class BudgetCreate(BaseModel):
    category_ids: set[str] = Field(min_length=1)
    amount: Decimal = Field(ge=0, decimal_places=4)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def window_must_be_ordered(self) -> "BudgetCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BudgetUpdate(BaseModel):
    category_ids: set[str] | None = Field(default=None, min_length=1)
    amount: Decimal | None = Field(default=None, ge=0, decimal_places=4)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    period: BudgetPeriod | None = None
    start_date: date | None = None
    end_date: date | None = None
