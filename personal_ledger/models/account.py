"""
Account entities.

An account is a tagged union over its type. Normal and savings
accounts share the same shape; credit accounts add an optional
credit limit. The balance is a cached aggregate kept in step with
the transaction log by the ledger engine, expressed in the
account's own currency.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, computed_field

from personal_ledger.models.enums import AccountType


class AccountBase(BaseModel):
    model_config = {"frozen": True}

    id: str
    title: str
    icon: str = "wallet"
    color: str = "#3B82F6"
    description: str | None = None
    currency: str = "USD"
    balance: Decimal = Decimal("0")
    include_in_total: bool = True
    is_archived: bool = False
    created_at: datetime
    updated_at: datetime


class NormalAccount(AccountBase):
    type: Literal["normal"] = "normal"


class SavingsAccount(AccountBase):
    type: Literal["savings"] = "savings"


class CreditAccount(AccountBase):
    type: Literal["credit"] = "credit"
    credit_limit: Decimal | None = None

    @computed_field
    @property
    def available_credit(self) -> Decimal | None:
        """Credit still usable. A negative balance is money owed."""
        if self.credit_limit is None:
            return None
        return self.credit_limit + self.balance


Account = Annotated[
    Union[NormalAccount, SavingsAccount, CreditAccount],
    Field(discriminator="type"),
]

ACCOUNT_CLASSES: dict[AccountType, type[AccountBase]] = {
    AccountType.NORMAL: NormalAccount,
    AccountType.SAVINGS: SavingsAccount,
    AccountType.CREDIT: CreditAccount,
}
