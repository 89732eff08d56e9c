"""
Shared FastAPI dependencies.

The ledger and the rate service live on app.state; routers
reach them only through these functions so tests can override
them.
"""

from fastapi import Request

from personal_ledger.services.exchange_rates import ExchangeRateService
from personal_ledger.services.ledger_service import LedgerService


def get_ledger(request: Request) -> LedgerService:
    return request.app.state.ledger


def get_rate_service(request: Request) -> ExchangeRateService:
    return request.app.state.rate_service
