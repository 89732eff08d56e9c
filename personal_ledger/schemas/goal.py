"""
Pydantic schemas for savings goal operations.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class GoalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    icon: str = Field(default="flag", max_length=50)
    color: str = Field(default="#10B981", max_length=20)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    target_amount: Decimal = Field(gt=0, decimal_places=4)
    target_date: date
    include_in_total: bool = False


class GoalUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    icon: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=20)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    current_amount: Decimal | None = Field(default=None, ge=0)
    target_amount: Decimal | None = Field(default=None, gt=0, decimal_places=4)
    target_date: date | None = None
    include_in_total: bool | None = None


class GoalContribution(BaseModel):
    amount: Decimal = Field(gt=0, decimal_places=4)
