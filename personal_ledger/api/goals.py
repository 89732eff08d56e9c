"""
Savings goal API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.goal import Goal
from personal_ledger.schemas.goal import GoalContribution, GoalCreate, GoalUpdate
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/goals", tags=["Goals"])


@router.post("", response_model=Goal, status_code=201)
def add_goal(
    request: GoalCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    return ledger.add_goal(request)


@router.get("", response_model=list[Goal])
def list_goals(ledger: LedgerService = Depends(get_ledger)):
    return list(ledger.state.goals)


@router.get("/{goal_id}", response_model=Goal)
def get_goal(
    goal_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    try:
        return ledger.get_goal(goal_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{goal_id}", response_model=Goal)
def update_goal(
    goal_id: str,
    patch: GoalUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    goal = ledger.update_goal(goal_id, patch)
    if goal is None:
        raise HTTPException(status_code=404, detail=f"Goal {goal_id} not found")
    return goal


@router.post("/{goal_id}/contributions", response_model=Goal)
def contribute_to_goal(
    goal_id: str,
    request: GoalContribution,
    ledger: LedgerService = Depends(get_ledger),
):
    """Add money to a goal. Contributions never touch accounts."""
    goal = ledger.add_to_goal(goal_id, request.amount)
    if goal is None:
        raise HTTPException(status_code=404, detail=f"Goal {goal_id} not found")
    return goal


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    ledger.delete_goal(goal_id)
    return Response(status_code=204)
