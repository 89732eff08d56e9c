"""
Personal Ledger — FastAPI Application.

This is the entry point for the application.
All routers are registered here, and the lifespan wires the
in-memory ledger to its collaborators: the snapshot store is
loaded at startup and saved after every mutation, and the rate
table is optionally refreshed in the background.
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from personal_ledger.config import get_settings
from personal_ledger.logging_config import configure_logging
from personal_ledger.api.accounts import router as accounts_router
from personal_ledger.api.backup import router as backup_router
from personal_ledger.api.budgets import router as budgets_router
from personal_ledger.api.categories import router as categories_router
from personal_ledger.api.goals import router as goals_router
from personal_ledger.api.health import router as health_router
from personal_ledger.api.rates import router as rates_router
from personal_ledger.api.recurring_payments import router as recurring_payments_router
from personal_ledger.api.reports import router as reports_router
from personal_ledger.api.transactions import router as transactions_router
from personal_ledger.models.base import Base, SessionLocal, engine
from personal_ledger.services.exchange_rates import ExchangeRateService
from personal_ledger.services.ledger_service import LedgerService
from personal_ledger.services.snapshot_service import (
    SnapshotService,
    make_snapshot_listener,
)

settings = get_settings()
configure_logging(settings.LOG_LEVEL, json_output=not settings.DEBUG)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ledger: LedgerService = app.state.ledger
    rate_service: ExchangeRateService = app.state.rate_service

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        state = SnapshotService(db).load_latest()
    if state is not None:
        ledger.restore(state)

    persist_snapshot = make_snapshot_listener(SessionLocal, keep=settings.SNAPSHOT_KEEP)
    ledger.subscribe(persist_snapshot)
    ledger.initialize_default_data()

    refresh_task = None
    if settings.RATES_AUTO_REFRESH:
        refresh_task = asyncio.create_task(rate_service.run_periodic())

    logger.info(
        "app_started",
        restored=state is not None,
        auto_refresh_rates=settings.RATES_AUTO_REFRESH,
    )
    yield

    if refresh_task is not None:
        refresh_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await refresh_task
    ledger.unsubscribe(persist_snapshot)
    logger.info("app_stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Personal finance ledger with cascading balances and budgets",
        lifespan=lifespan,
    )

    rate_service = ExchangeRateService()
    app.state.rate_service = rate_service
    app.state.ledger = LedgerService(rate_provider=lambda: rate_service.cached_rates)

    # Register routers
    app.include_router(health_router)
    app.include_router(transactions_router)
    app.include_router(accounts_router)
    app.include_router(budgets_router)
    app.include_router(goals_router)
    app.include_router(recurring_payments_router)
    app.include_router(categories_router)
    app.include_router(rates_router)
    app.include_router(reports_router)
    app.include_router(backup_router)
    return app


app = create_app()
