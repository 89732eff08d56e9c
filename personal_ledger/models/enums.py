"""
Shared enumerations for ledger entities.

Using str-based enums means values serialize to plain strings
in snapshots and API payloads, and invalid values are rejected
at validation time instead of leaking into the ledger.
"""

import enum


class TransactionType(str, enum.Enum):
    """Direction of a money movement."""
    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, enum.Enum):
    """Account variants. Only credit accounts carry a credit limit."""
    NORMAL = "normal"
    SAVINGS = "savings"
    CREDIT = "credit"


class Frequency(str, enum.Enum):
    """Cadence of a recurring payment."""
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BudgetPeriod(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Reserved category id for transfers between accounts.
# It never belongs to a user category and never matches a budget.
TRANSFER_CATEGORY_ID = "transfer"
