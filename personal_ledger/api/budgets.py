"""
Budget API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.budget import Budget
from personal_ledger.schemas.budget import BudgetCreate, BudgetUpdate
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/budgets", tags=["Budgets"])


@router.post("", response_model=Budget, status_code=201)
def add_budget(
    request: BudgetCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    """
    Create a budget.

    It starts with spent = 0. Call /budgets/recalculate when the
    window reaches back over existing transactions.
    """
    return ledger.add_budget(request)


@router.get("", response_model=list[Budget])
def list_budgets(ledger: LedgerService = Depends(get_ledger)):
    return list(ledger.state.budgets)


@router.post("/recalculate", response_model=list[Budget])
def recalculate_budgets(ledger: LedgerService = Depends(get_ledger)):
    """Rebuild every budget's spent from the transaction log."""
    return list(ledger.recalculate_budgets_spent())


@router.get("/{budget_id}", response_model=Budget)
def get_budget(
    budget_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    try:
        return ledger.get_budget(budget_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{budget_id}", response_model=Budget)
def update_budget(
    budget_id: str,
    patch: BudgetUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    budget = ledger.update_budget(budget_id, patch)
    if budget is None:
        raise HTTPException(status_code=404, detail=f"Budget {budget_id} not found")
    return budget


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    ledger.delete_budget(budget_id)
    return Response(status_code=204)
