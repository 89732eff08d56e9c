"""
Pydantic schemas for transaction operations.

Create schemas validate business rules (positive amounts,
non-empty categories) before anything reaches the engine.
Update schemas are patches: only fields explicitly set are
applied.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from personal_ledger.models.enums import TransactionType


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: Decimal = Field(gt=0, decimal_places=4)
    category_id: str = Field(min_length=1, max_length=100)
    account_id: str | None = None
    description: str = Field(default="", max_length=255)
    date: datetime.date = Field(default_factory=datetime.date.today)
    is_recurring: bool = False
    recurring_id: str | None = None


class TransactionUpdate(BaseModel):
    type: TransactionType | None = None
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=4)
    category_id: str | None = Field(default=None, min_length=1, max_length=100)
    account_id: str | None = None
    description: str | None = Field(default=None, max_length=255)
    date: datetime.date | None = None
    is_recurring: bool | None = None
    recurring_id: str | None = None


class TransferRequest(BaseModel):
    """
    Move money between two accounts.

    The amount is not range-checked here: the engine treats a
    non-positive amount as a no-op and the router reports it.
    """
    source_account_id: str
    destination_account_id: str
    amount: Decimal
    description: str | None = Field(default=None, max_length=255)
    date: datetime.date | None = None
