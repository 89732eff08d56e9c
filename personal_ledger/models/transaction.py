"""
Transaction entity.

A transaction records one income or expense. Its identity is
immutable; the mutable fields (account, amount, type, category,
date) cascade into account balances and budget aggregates when
they change.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel

from personal_ledger.models.enums import TransactionType


class Transaction(BaseModel):
    model_config = {"frozen": True}

    id: str
    type: TransactionType
    amount: Decimal
    category_id: str
    account_id: str | None = None
    description: str = ""
    date: datetime.date
    is_recurring: bool = False
    recurring_id: str | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this transaction on its account balance."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount
