"""
Snapshot service — persistence and backup collaborators.

The ledger engine is purely in-memory. This service stores
complete serialized states in the snapshot table and reads the
newest one back at startup. It also builds and parses the
versioned full-backup payload used for export and restore.

The caller controls the commit, as with every service that
takes a session.
"""

from datetime import datetime

import structlog
from pydantic import ValidationError
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from personal_ledger.models.snapshot import LedgerSnapshot
from personal_ledger.models.state import LedgerState

logger = structlog.get_logger(__name__)

SNAPSHOT_VERSION = 1
BACKUP_VERSION = 1
BACKUP_TYPE = "full-backup"


class SnapshotService:

    def __init__(self, db: Session):
        self.db = db

    def save(self, state: LedgerState, reason: str = "mutation") -> LedgerSnapshot:
        """Append a snapshot of the full state."""
        snapshot = LedgerSnapshot(
            version=SNAPSHOT_VERSION,
            reason=reason,
            payload=state.model_dump_json(),
        )
        self.db.add(snapshot)
        self.db.flush()
        logger.debug("snapshot_saved", snapshot_id=snapshot.id, reason=reason)
        return snapshot

    def load_latest(self) -> LedgerState | None:
        """Return the newest stored state, or None when nothing was saved yet."""
        snapshot = self.db.execute(
            select(LedgerSnapshot)
            .order_by(LedgerSnapshot.id.desc())
            .limit(1)
        ).scalar_one_or_none()

        if snapshot is None:
            return None
        return LedgerState.model_validate_json(snapshot.payload)

    def prune(self, keep: int = 50) -> int:
        """Delete all but the newest `keep` snapshots. Returns rows removed."""
        keep_ids = select(LedgerSnapshot.id).order_by(
            LedgerSnapshot.id.desc()
        ).limit(keep)
        result = self.db.execute(
            delete(LedgerSnapshot).where(
                LedgerSnapshot.id.not_in(keep_ids.scalar_subquery())
            )
        )
        self.db.flush()
        return result.rowcount or 0

    def count(self) -> int:
        return len(self.db.execute(select(LedgerSnapshot.id)).all())


def export_backup(state: LedgerState, exported_at: datetime | None = None) -> dict:
    """Build a versioned full-backup payload from a state."""
    return {
        "version": BACKUP_VERSION,
        "type": BACKUP_TYPE,
        "exported_at": (exported_at or datetime.utcnow()).isoformat(),
        "data": state.model_dump(mode="json"),
    }


def import_backup(payload: dict) -> LedgerState:
    """
    Parse a full-backup payload back into a state.

    Raises ValueError if the payload is not a full backup, has an
    unsupported version, or its data does not validate. Derived
    fields inside the data are accepted as-is; the caller decides
    whether to re-derive them.
    """
    if not isinstance(payload, dict) or payload.get("type") != BACKUP_TYPE:
        raise ValueError("Payload is not a full backup")
    if payload.get("version") != BACKUP_VERSION:
        raise ValueError(f"Unsupported backup version: {payload.get('version')}")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise ValueError("Backup payload has no data section")

    try:
        return LedgerState.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Backup data is invalid ({e.error_count()} errors)") from e


def make_snapshot_listener(session_factory, keep: int = 50):
    """
    Build a LedgerService subscriber that stores every new state.

    Only the newest `keep` snapshots are retained; older rows are
    pruned in the same commit as the save.

    A failed save is logged and rolled back. The in-memory ledger
    stays authoritative and the next mutation saves again.
    """
    def persist_snapshot(state: LedgerState, action: str) -> None:
        db = session_factory()
        try:
            service = SnapshotService(db)
            service.save(state, reason=action)
            service.prune(keep=keep)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("snapshot_save_failed", action=action)
        finally:
            db.close()

    return persist_snapshot
