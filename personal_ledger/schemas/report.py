"""
Pydantic schemas for reporting queries.

These are read models: cross-currency totals and summaries
computed from the ledger state on request, never stored.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from personal_ledger.models.enums import TransactionType


class ConversionResponse(BaseModel):
    amount: Decimal
    source: str
    destination: str
    result: Decimal


class RatesResponse(BaseModel):
    base: str
    rates: dict[str, Decimal]


class TotalBalanceResponse(BaseModel):
    currency: str
    total: Decimal
    account_count: int


class PeriodSummary(BaseModel):
    start_date: date
    end_date: date
    currency: str
    income: Decimal
    expense: Decimal
    net: Decimal


class CategoryTotal(BaseModel):
    category_id: str
    category_name: str
    amount: Decimal
    percentage: Decimal


class CategoryBreakdown(BaseModel):
    start_date: date
    end_date: date
    type: TransactionType
    currency: str
    total: Decimal
    categories: list[CategoryTotal]


class UpcomingPayment(BaseModel):
    payment_id: str
    description: str
    amount: Decimal
    currency: str
    due_date: date
    days_until: int


class PreferredCurrencyUpdate(BaseModel):
    currency: str = Field(min_length=3, max_length=3)
