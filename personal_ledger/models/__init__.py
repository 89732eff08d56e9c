"""
Ledger models package.

Domain entities are immutable pydantic models owned by the
ledger state. The snapshot table is the only SQLAlchemy model;
it is imported here so Base.metadata knows about it.
"""

from personal_ledger.models.base import Base
from personal_ledger.models.enums import (
    TransactionType,
    AccountType,
    Frequency,
    BudgetPeriod,
    TRANSFER_CATEGORY_ID,
)
from personal_ledger.models.account import (
    Account,
    AccountBase,
    NormalAccount,
    SavingsAccount,
    CreditAccount,
)
from personal_ledger.models.transaction import Transaction
from personal_ledger.models.category import Category
from personal_ledger.models.budget import Budget
from personal_ledger.models.goal import Goal
from personal_ledger.models.recurring_payment import RecurringPayment
from personal_ledger.models.state import LedgerState
from personal_ledger.models.snapshot import LedgerSnapshot

__all__ = [
    "Base",
    "TransactionType",
    "AccountType",
    "Frequency",
    "BudgetPeriod",
    "TRANSFER_CATEGORY_ID",
    "Account",
    "AccountBase",
    "NormalAccount",
    "SavingsAccount",
    "CreditAccount",
    "Transaction",
    "Category",
    "Budget",
    "Goal",
    "RecurringPayment",
    "LedgerState",
    "LedgerSnapshot",
]
