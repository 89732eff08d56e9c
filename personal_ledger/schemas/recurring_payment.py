"""
Pydantic schemas for recurring payments and their projections.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from personal_ledger.models.enums import Frequency, TransactionType


class RecurringPaymentCreate(BaseModel):
    type: TransactionType = TransactionType.EXPENSE
    amount: Decimal = Field(gt=0, decimal_places=4)
    category_id: str = Field(min_length=1, max_length=100)
    account_id: str | None = None
    currency: str = Field(default="USD", min_length=3, max_length=3)
    description: str = Field(default="", max_length=255)
    frequency: Frequency
    next_date: date
    is_active: bool = True
    is_paid: bool = False
    reminder_enabled: bool = False
    reminder_days_before: int = Field(default=1, ge=0, le=365)


class RecurringPaymentUpdate(BaseModel):
    type: TransactionType | None = None
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=4)
    category_id: str | None = Field(default=None, min_length=1, max_length=100)
    account_id: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    description: str | None = Field(default=None, max_length=255)
    frequency: Frequency | None = None
    next_date: date | None = None
    is_active: bool | None = None
    is_paid: bool | None = None
    reminder_enabled: bool | None = None
    reminder_days_before: int | None = Field(default=None, ge=0, le=365)


class OccurrencesResponse(BaseModel):
    payment_id: str
    start_date: date
    end_date: date
    occurrences: list[date]
