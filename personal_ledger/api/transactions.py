"""
Transaction API endpoints.

The API layer is thin: it handles HTTP concerns and delegates
every cascade to the LedgerService.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.transaction import Transaction
from personal_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransferRequest,
)
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=Transaction, status_code=201)
def add_transaction(
    request: TransactionCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    """Record an income or expense and update the affected account and budgets."""
    return ledger.add_transaction(request)


@router.get("", response_model=list[Transaction])
def list_transactions(
    start_date: date | None = None,
    end_date: date | None = None,
    account_id: str | None = None,
    ledger: LedgerService = Depends(get_ledger),
):
    """List transactions, newest first, optionally by date range and account."""
    if (start_date is None) != (end_date is None):
        raise HTTPException(
            status_code=400,
            detail="start_date and end_date must be given together",
        )

    if start_date is not None:
        transactions = ledger.get_transactions_by_date_range(start_date, end_date)
    else:
        transactions = list(ledger.state.transactions)

    if account_id is not None:
        transactions = [t for t in transactions if t.account_id == account_id]
    return transactions


@router.post("/transfer", response_model=list[Transaction], status_code=201)
def transfer(
    request: TransferRequest,
    ledger: LedgerService = Depends(get_ledger),
):
    """
    Transfer money between two accounts.

    Returns the expense and income legs. A transfer the engine
    skips (unknown account, non-positive amount) is reported as
    a 400.
    """
    pair = ledger.transfer_money(request)
    if pair is None:
        raise HTTPException(
            status_code=400,
            detail="Transfer skipped: both accounts must exist and amount must be positive",
        )
    return list(pair)


@router.get("/{transaction_id}", response_model=Transaction)
def get_transaction(
    transaction_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    try:
        return ledger.get_transaction(transaction_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{transaction_id}", response_model=Transaction)
def update_transaction(
    transaction_id: str,
    patch: TransactionUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    """Edit a transaction; balances and budgets are re-cascaded."""
    transaction = ledger.update_transaction(transaction_id, patch)
    if transaction is None:
        raise HTTPException(
            status_code=404, detail=f"Transaction {transaction_id} not found"
        )
    return transaction


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    if ledger.delete_transaction(transaction_id) is None:
        raise HTTPException(
            status_code=404, detail=f"Transaction {transaction_id} not found"
        )
    return Response(status_code=204)
