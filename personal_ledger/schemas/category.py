"""
Pydantic schemas for category operations.
"""

from pydantic import BaseModel, Field

from personal_ledger.models.enums import TransactionType


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    icon: str = Field(default="pricetag", max_length=50)
    color: str = Field(default="#6B7280", max_length=20)
    type: TransactionType
    is_default: bool = False


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    icon: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=20)
    type: TransactionType | None = None
