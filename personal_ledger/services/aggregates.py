"""
Budget aggregate recalculation.

calculate_budget_spent is the single source of truth for what a
budget's cached `spent` should hold. The engine's incremental
updates are an optimization over calling it, and must always
agree with it.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from personal_ledger.models.budget import Budget
from personal_ledger.models.enums import TransactionType, TRANSFER_CATEGORY_ID
from personal_ledger.models.transaction import Transaction


def counts_toward(
    transaction: Transaction,
    category_ids: Iterable[str],
    start_date: date,
    end_date: date,
) -> bool:
    """True when the transaction is an expense inside the category set and window."""
    return (
        transaction.type == TransactionType.EXPENSE
        and transaction.category_id != TRANSFER_CATEGORY_ID
        and transaction.category_id in category_ids
        and start_date <= transaction.date <= end_date
    )


def calculate_budget_spent(
    transactions: Iterable[Transaction],
    category_ids: Iterable[str],
    start_date: date,
    end_date: date,
) -> Decimal:
    """Sum of matching expense amounts, window inclusive on both ends."""
    category_ids = frozenset(category_ids)
    return sum(
        (
            t.amount for t in transactions
            if counts_toward(t, category_ids, start_date, end_date)
        ),
        Decimal("0"),
    )


def budget_matches(budget: Budget, transaction: Transaction) -> bool:
    return counts_toward(
        transaction, budget.category_ids, budget.start_date, budget.end_date
    )


def recalculate_budget(
    budget: Budget, transactions: Iterable[Transaction]
) -> Budget:
    """Return the budget with `spent` rebuilt from the transaction log."""
    spent = calculate_budget_spent(
        transactions, budget.category_ids, budget.start_date, budget.end_date
    )
    return budget.model_copy(update={"spent": spent})
