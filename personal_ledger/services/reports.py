"""
Reporting queries over a ledger state.

Read-only helpers used by dashboards and statistics screens.
Cross-currency figures go through the currency normalizer with
whatever rate table the caller supplies; nothing here mutates
the state.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal

from personal_ledger.models.enums import TransactionType, TRANSFER_CATEGORY_ID
from personal_ledger.models.state import LedgerState
from personal_ledger.models.transaction import Transaction
from personal_ledger.schemas.report import (
    CategoryBreakdown,
    CategoryTotal,
    PeriodSummary,
    TotalBalanceResponse,
    UpcomingPayment,
)
from personal_ledger.services.currency import RateTable, convert
from personal_ledger.services.projector import next_occurrence

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def _transaction_currency(state: LedgerState, transaction: Transaction) -> str:
    """A transaction is denominated in its account's currency, if it has one."""
    for account in state.accounts:
        if account.id == transaction.account_id:
            return account.currency
    return state.preferred_currency


def _reportable(
    state: LedgerState, start_date: date, end_date: date
) -> list[Transaction]:
    """Transactions inside the window, transfers excluded."""
    return [
        t for t in state.transactions
        if start_date <= t.date <= end_date
        and t.category_id != TRANSFER_CATEGORY_ID
    ]


def total_balance(
    state: LedgerState, currency: str, rates: RateTable
) -> TotalBalanceResponse:
    """Sum of active, included account balances, converted into one currency."""
    included = [
        a for a in state.accounts
        if a.include_in_total and not a.is_archived
    ]
    total = sum(
        (convert(a.balance, a.currency, currency, rates) for a in included),
        ZERO,
    )
    return TotalBalanceResponse(
        currency=currency, total=total, account_count=len(included)
    )


def period_summary(
    state: LedgerState,
    start_date: date,
    end_date: date,
    currency: str,
    rates: RateTable,
) -> PeriodSummary:
    income = ZERO
    expense = ZERO
    for t in _reportable(state, start_date, end_date):
        amount = convert(t.amount, _transaction_currency(state, t), currency, rates)
        if t.type == TransactionType.INCOME:
            income += amount
        else:
            expense += amount

    return PeriodSummary(
        start_date=start_date,
        end_date=end_date,
        currency=currency,
        income=income,
        expense=expense,
        net=income - expense,
    )


def category_breakdown(
    state: LedgerState,
    start_date: date,
    end_date: date,
    transaction_type: TransactionType,
    currency: str,
    rates: RateTable,
) -> CategoryBreakdown:
    """Per-category totals for one transaction type, largest first."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in _reportable(state, start_date, end_date):
        if t.type != transaction_type:
            continue
        totals[t.category_id] += convert(
            t.amount, _transaction_currency(state, t), currency, rates
        )

    grand_total = sum(totals.values(), ZERO)
    names = {c.id: c.name for c in state.categories}

    categories = [
        CategoryTotal(
            category_id=category_id,
            category_name=names.get(category_id, category_id),
            amount=amount,
            percentage=(
                (amount / grand_total * HUNDRED).quantize(CENT)
                if grand_total else ZERO
            ),
        )
        for category_id, amount in sorted(
            totals.items(), key=lambda item: item[1], reverse=True
        )
    ]

    return CategoryBreakdown(
        start_date=start_date,
        end_date=end_date,
        type=transaction_type,
        currency=currency,
        total=grand_total,
        categories=categories,
    )


def upcoming_payments(
    state: LedgerState, today: date, days: int = 7
) -> list[UpcomingPayment]:
    """Active recurring payments falling due within the next `days` days."""
    horizon = today + timedelta(days=days)
    upcoming = []
    for payment in state.recurring_payments:
        if not payment.is_active:
            continue
        due = next_occurrence(payment, today)
        if due is None or due > horizon:
            continue
        upcoming.append(UpcomingPayment(
            payment_id=payment.id,
            description=payment.description,
            amount=payment.amount,
            currency=payment.currency,
            due_date=due,
            days_until=(due - today).days,
        ))
    return sorted(upcoming, key=lambda p: p.due_date)
