"""
Recurring payment API endpoints.

Occurrence projection is read-only: it never moves a payment's
anchor date.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.recurring_payment import RecurringPayment
from personal_ledger.schemas.recurring_payment import (
    OccurrencesResponse,
    RecurringPaymentCreate,
    RecurringPaymentUpdate,
)
from personal_ledger.schemas.report import UpcomingPayment
from personal_ledger.services.ledger_service import LedgerService
from personal_ledger.services.projector import project_occurrences

router = APIRouter(prefix="/recurring-payments", tags=["Recurring Payments"])


@router.post("", response_model=RecurringPayment, status_code=201)
def add_recurring_payment(
    request: RecurringPaymentCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    return ledger.add_recurring_payment(request)


@router.get("", response_model=list[RecurringPayment])
def list_recurring_payments(ledger: LedgerService = Depends(get_ledger)):
    return list(ledger.state.recurring_payments)


@router.get("/upcoming", response_model=list[UpcomingPayment])
def upcoming_payments(
    days: int = 7,
    today: date | None = None,
    ledger: LedgerService = Depends(get_ledger),
):
    """Active payments falling due within the next `days` days."""
    return ledger.upcoming_payments(today, days)


@router.get("/{payment_id}", response_model=RecurringPayment)
def get_recurring_payment(
    payment_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    try:
        return ledger.get_recurring_payment(payment_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{payment_id}/occurrences", response_model=OccurrencesResponse)
def get_occurrences(
    payment_id: str,
    start_date: date,
    end_date: date,
    ledger: LedgerService = Depends(get_ledger),
):
    """Project the payment's occurrence dates inside [start_date, end_date]."""
    try:
        payment = ledger.get_recurring_payment(payment_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return OccurrencesResponse(
        payment_id=payment.id,
        start_date=start_date,
        end_date=end_date,
        occurrences=project_occurrences(payment, start_date, end_date),
    )


@router.patch("/{payment_id}", response_model=RecurringPayment)
def update_recurring_payment(
    payment_id: str,
    patch: RecurringPaymentUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    payment = ledger.update_recurring_payment(payment_id, patch)
    if payment is None:
        raise HTTPException(
            status_code=404, detail=f"Recurring payment {payment_id} not found"
        )
    return payment


@router.delete("/{payment_id}", status_code=204)
def delete_recurring_payment(
    payment_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    ledger.delete_recurring_payment(payment_id)
    return Response(status_code=204)
