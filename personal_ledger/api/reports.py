"""
Reporting endpoints.

Totals and summaries are derived from the current ledger state
on every request. Omitting `currency` reports in the preferred
currency.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.enums import TransactionType
from personal_ledger.schemas.report import (
    CategoryBreakdown,
    PeriodSummary,
    PreferredCurrencyUpdate,
    TotalBalanceResponse,
)
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/reports", tags=["Reports"])


def _check_window(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise HTTPException(
            status_code=400, detail="end_date must not be before start_date"
        )


@router.get("/total-balance", response_model=TotalBalanceResponse)
def total_balance(
    currency: str | None = None,
    ledger: LedgerService = Depends(get_ledger),
):
    return ledger.total_balance(currency.upper() if currency else None)


@router.get("/summary", response_model=PeriodSummary)
def period_summary(
    start_date: date,
    end_date: date,
    currency: str | None = None,
    ledger: LedgerService = Depends(get_ledger),
):
    """Income, expense and net for a date window. Transfers are excluded."""
    _check_window(start_date, end_date)
    return ledger.period_summary(
        start_date, end_date, currency.upper() if currency else None
    )


@router.get("/categories", response_model=CategoryBreakdown)
def category_breakdown(
    start_date: date,
    end_date: date,
    type: TransactionType = TransactionType.EXPENSE,
    currency: str | None = None,
    ledger: LedgerService = Depends(get_ledger),
):
    _check_window(start_date, end_date)
    return ledger.category_breakdown(
        start_date, end_date, type, currency.upper() if currency else None
    )


@router.put("/preferred-currency", response_model=PreferredCurrencyUpdate)
def set_preferred_currency(
    request: PreferredCurrencyUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    """Change the currency reports default to."""
    ledger.set_preferred_currency(request.currency.upper())
    return PreferredCurrencyUpdate(currency=ledger.state.preferred_currency)
