"""
Ledger state.

The whole ledger is one immutable value. Every engine action
takes a state and returns a new one, so a mutation is observed
either completely or not at all. The state round-trips through
plain JSON, which is what snapshot and backup collaborators
store.
"""

from pydantic import BaseModel

from personal_ledger.models.account import Account
from personal_ledger.models.budget import Budget
from personal_ledger.models.category import Category
from personal_ledger.models.goal import Goal
from personal_ledger.models.recurring_payment import RecurringPayment
from personal_ledger.models.transaction import Transaction


class LedgerState(BaseModel):
    model_config = {"frozen": True}

    # Newest first
    transactions: tuple[Transaction, ...] = ()
    categories: tuple[Category, ...] = ()
    accounts: tuple[Account, ...] = ()
    budgets: tuple[Budget, ...] = ()
    goals: tuple[Goal, ...] = ()
    recurring_payments: tuple[RecurringPayment, ...] = ()
    preferred_currency: str = "USD"
    is_initialized: bool = False
