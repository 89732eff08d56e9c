"""
Exchange rate endpoints.

GET /rates refreshes a stale table before answering and
/rates/refresh always fetches. A failed fetch still answers with
the cache. Conversion only reads the cached table.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from personal_ledger.api.deps import get_rate_service
from personal_ledger.schemas.report import ConversionResponse, RatesResponse
from personal_ledger.services.currency import convert
from personal_ledger.services.exchange_rates import ExchangeRateService

router = APIRouter(prefix="/rates", tags=["Rates"])


@router.get("", response_model=RatesResponse)
async def get_rates(rate_service: ExchangeRateService = Depends(get_rate_service)):
    """Current rate table, refreshed first when older than the refresh interval."""
    rates = await rate_service.get_rates()
    return RatesResponse(base=rate_service.reference_currency, rates=rates)


@router.post("/refresh", response_model=RatesResponse)
async def refresh_rates(
    rate_service: ExchangeRateService = Depends(get_rate_service),
):
    rates = await rate_service.refresh()
    return RatesResponse(base=rate_service.reference_currency, rates=rates)


@router.get("/convert", response_model=ConversionResponse)
def convert_amount(
    amount: Decimal,
    source: str = Query(min_length=3, max_length=3),
    destination: str = Query(min_length=3, max_length=3),
    rate_service: ExchangeRateService = Depends(get_rate_service),
):
    """Convert an amount with the cached table. Unknown codes convert at 1."""
    source = source.upper()
    destination = destination.upper()
    return ConversionResponse(
        amount=amount,
        source=source,
        destination=destination,
        result=convert(amount, source, destination, rate_service.cached_rates),
    )
