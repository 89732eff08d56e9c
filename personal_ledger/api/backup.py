"""
Backup endpoints.

Export returns the whole ledger as a versioned JSON document.
Restore replaces the whole ledger with an exported document.
"""

from fastapi import APIRouter, Body, Depends, HTTPException

from personal_ledger.api.deps import get_ledger
from personal_ledger.services.ledger_service import LedgerService
from personal_ledger.services.snapshot_service import export_backup, import_backup

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("")
def export_ledger(ledger: LedgerService = Depends(get_ledger)):
    return export_backup(ledger.state)


@router.post("/restore")
def restore_ledger(
    payload: dict = Body(...),
    recalculate: bool = True,
    ledger: LedgerService = Depends(get_ledger),
):
    """
    Replace the ledger with a full backup.

    Budget `spent` values are re-derived from the restored log
    unless recalculate=false.
    """
    try:
        state = import_backup(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = ledger.restore(state, recalculate=recalculate)
    return {
        "status": "restored",
        "transactions": len(state.transactions),
        "accounts": len(state.accounts),
        "budgets": len(state.budgets),
    }
