"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.category import Category
from personal_ledger.schemas.category import CategoryCreate, CategoryUpdate
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.post("", response_model=Category, status_code=201)
def add_category(
    request: CategoryCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    return ledger.add_category(request)


@router.get("", response_model=list[Category])
def list_categories(ledger: LedgerService = Depends(get_ledger)):
    return list(ledger.state.categories)


@router.post("/defaults", response_model=list[Category])
def initialize_defaults(ledger: LedgerService = Depends(get_ledger)):
    """Seed the default categories. Safe to call more than once."""
    ledger.initialize_default_data()
    return list(ledger.state.categories)


@router.patch("/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    patch: CategoryUpdate,
    ledger: LedgerService = Depends(get_ledger),
):
    category = ledger.update_category(category_id, patch)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return category


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    """Delete a user category. Default categories are left in place."""
    ledger.delete_category(category_id)
    return Response(status_code=204)
