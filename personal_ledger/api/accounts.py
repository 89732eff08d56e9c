"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.account import Account
from personal_ledger.models.transaction import Transaction
from personal_ledger.schemas.account import AccountCreate, AccountUpdate
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=Account, status_code=201)
def add_account(
    request: AccountCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    """Open an account with an opening balance."""
    return ledger.add_account(request)


@router.get("", response_model=list[Account])
def list_accounts(
    include_archived: bool = True,
    ledger: LedgerService = Depends(get_ledger),
):
    return [
        a for a in ledger.state.accounts
        if include_archived or not a.is_archived
    ]


@router.get("/{account_id}", response_model=Account)
def get_account(
    account_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    try:
        return ledger.get_account(account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{account_id}/transactions", response_model=list[Transaction])
def get_account_transactions(
    account_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    """All transactions posted to an account, newest first."""
    try:
        ledger.get_account(account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ledger.get_transactions_by_account(account_id)


@router.patch("/{account_id}", response_model=Account)
def update_account(
    account_id: str,
    patch: AccountUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    """
    Edit an account.

    A balance in the body is a manual override of the cached
    balance; no transaction is recorded for it.
    """
    account = ledger.update_account(account_id, patch)
    if account is None:
        raise HTTPException(status_code=404, detail=f"Account {account_id} not found")
    return account


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    ledger.delete_account(account_id)
    return Response(status_code=204)
