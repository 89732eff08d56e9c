"""
Health check endpoint.

Reports whether the app is responsive and whether the snapshot
store is reachable.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from personal_ledger.api.deps import get_ledger
from personal_ledger.models.base import get_db
from personal_ledger.services.ledger_service import LedgerService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    ledger: LedgerService = Depends(get_ledger),
):
    """
    Return application health status including snapshot store connectivity.

    The ledger itself is in memory and always available; a
    degraded status means snapshots are not being persisted.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "personal-ledger",
        "database": db_status,
        "transactions": len(ledger.state.transactions),
    }
