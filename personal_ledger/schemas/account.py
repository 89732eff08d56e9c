"""
Pydantic schemas for account operations.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from personal_ledger.models.enums import AccountType


class AccountCreate(BaseModel):
    type: AccountType = AccountType.NORMAL
    title: str = Field(min_length=1, max_length=100)
    icon: str = Field(default="wallet", max_length=50)
    color: str = Field(default="#3B82F6", max_length=20)
    description: str | None = Field(default=None, max_length=255)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    balance: Decimal = Decimal("0")
    credit_limit: Decimal | None = Field(default=None, ge=0)
    include_in_total: bool = True
    is_archived: bool = False


class AccountUpdate(BaseModel):
    """
    Patch for an account.

    Setting balance here is a manual override: it replaces the
    cached balance without touching any transaction.
    """
    type: AccountType | None = None
    title: str | None = Field(default=None, min_length=1, max_length=100)
    icon: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=20)
    description: str | None = Field(default=None, max_length=255)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    balance: Decimal | None = None
    credit_limit: Decimal | None = Field(default=None, ge=0)
    include_in_total: bool | None = None
    is_archived: bool | None = None
