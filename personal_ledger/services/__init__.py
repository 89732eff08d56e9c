"""Ledger services: the consistency engine, pure utilities and collaborators."""

from personal_ledger.services.ledger_service import LedgerService
from personal_ledger.services.exchange_rates import ExchangeRateService
from personal_ledger.services.snapshot_service import SnapshotService

__all__ = ["LedgerService", "ExchangeRateService", "SnapshotService"]
