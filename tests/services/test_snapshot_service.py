"""
Tests for snapshot persistence and full backups.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from personal_ledger.models.enums import AccountType, TransactionType
from personal_ledger.schemas.account import AccountCreate
from personal_ledger.schemas.budget import BudgetCreate
from personal_ledger.schemas.transaction import TransactionCreate
from personal_ledger.services.snapshot_service import (
    SnapshotService,
    export_backup,
    import_backup,
    make_snapshot_listener,
)


def populate(ledger):
    account = ledger.add_account(AccountCreate(
        title="Card",
        type=AccountType.CREDIT,
        balance=Decimal("-50"),
        credit_limit=Decimal("500"),
    ))
    ledger.add_budget(BudgetCreate(
        category_ids={"food"},
        amount=Decimal("300"),
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 31),
    ))
    ledger.add_transaction(TransactionCreate(
        type=TransactionType.EXPENSE,
        amount=Decimal("12.5"),
        category_id="food",
        account_id=account.id,
        date=date(2024, 3, 3),
    ))
    return account


class TestSnapshotService:

    def test_load_latest_empty(self, db_session):
        assert SnapshotService(db_session).load_latest() is None

    def test_save_and_load(self, db_session, ledger):
        populate(ledger)
        service = SnapshotService(db_session)
        service.save(ledger.state, reason="test")
        db_session.commit()

        assert service.load_latest() == ledger.state

    def test_latest_wins(self, db_session, ledger):
        service = SnapshotService(db_session)
        service.save(ledger.state)
        populate(ledger)
        service.save(ledger.state)
        db_session.commit()

        assert len(service.load_latest().accounts) == 1

    def test_prune(self, db_session, ledger):
        service = SnapshotService(db_session)
        for _ in range(5):
            service.save(ledger.state)
        db_session.commit()

        removed = service.prune(keep=2)
        db_session.commit()

        assert removed == 3
        assert service.count() == 2

    def test_listener_persists_every_mutation(self, db_session, session_factory, ledger):
        ledger.subscribe(make_snapshot_listener(session_factory))
        populate(ledger)

        service = SnapshotService(db_session)
        assert service.count() == 3
        assert service.load_latest() == ledger.state

    def test_listener_keeps_newest_snapshots(self, db_session, session_factory, ledger):
        ledger.subscribe(make_snapshot_listener(session_factory, keep=2))
        populate(ledger)
        ledger.set_preferred_currency("EUR")

        service = SnapshotService(db_session)
        assert service.count() == 2
        assert service.load_latest() == ledger.state


class TestBackup:

    def test_export_shape(self, ledger):
        populate(ledger)
        payload = export_backup(ledger.state, exported_at=datetime(2024, 3, 4, 12))

        assert payload["version"] == 1
        assert payload["type"] == "full-backup"
        assert payload["exported_at"] == "2024-03-04T12:00:00"
        assert len(payload["data"]["transactions"]) == 1

    def test_export_then_import(self, ledger):
        populate(ledger)
        assert import_backup(export_backup(ledger.state)) == ledger.state

    @pytest.mark.parametrize("payload", [
        [],
        {"type": "settings", "version": 1, "data": {}},
        {"type": "full-backup", "version": 99, "data": {}},
        {"type": "full-backup", "version": 1},
        {"type": "full-backup", "version": 1, "data": {"accounts": [{"type": "gold"}]}},
    ])
    def test_invalid_payload_rejected(self, payload):
        with pytest.raises(ValueError):
            import_backup(payload)
