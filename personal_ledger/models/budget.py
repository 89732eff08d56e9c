"""
Budget entity.

`spent` is a cached aggregate, not a source of truth. It must
always equal the sum of matching expenses inside the budget
window, and can be rebuilt at any time from the transaction log.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, computed_field

from personal_ledger.models.enums import BudgetPeriod


class Budget(BaseModel):
    model_config = {"frozen": True}

    id: str
    category_ids: frozenset[str]
    amount: Decimal
    currency: str = "USD"
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: date
    end_date: date
    spent: Decimal = Decimal("0")
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def remaining(self) -> Decimal:
        return self.amount - self.spent

    @computed_field
    @property
    def progress(self) -> Decimal:
        if self.amount == 0:
            return Decimal("0")
        return self.spent / self.amount

    @computed_field
    @property
    def is_exceeded(self) -> bool:
        return self.spent > self.amount
