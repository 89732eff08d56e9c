"""
Recurring payment definition.

next_date is the anchor the occurrence projector steps from.
It only changes through an explicit update; projected
occurrences are derived on demand and never stored.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from personal_ledger.models.enums import Frequency, TransactionType


class RecurringPayment(BaseModel):
    model_config = {"frozen": True}

    id: str
    type: TransactionType = TransactionType.EXPENSE
    amount: Decimal
    category_id: str
    account_id: str | None = None
    currency: str = "USD"
    description: str = ""
    frequency: Frequency
    next_date: date
    is_active: bool = True
    is_paid: bool = False
    reminder_enabled: bool = False
    reminder_days_before: int = 1
    created_at: datetime
    updated_at: datetime
