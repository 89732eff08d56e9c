"""
Savings goal entity.

current_amount only moves through explicit contributions or
direct edits. Transactions never cascade into goals.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, computed_field


class Goal(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    description: str | None = None
    icon: str = "flag"
    color: str = "#10B981"
    currency: str = "USD"
    current_amount: Decimal = Decimal("0")
    target_amount: Decimal
    target_date: date
    include_in_total: bool = False
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount

    @computed_field
    @property
    def progress(self) -> Decimal:
        if self.target_amount == 0:
            return Decimal("1")
        return min(self.current_amount / self.target_amount, Decimal("1"))
