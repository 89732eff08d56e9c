"""
Exchange rate collaborator.

Fetches the current rate table (units of each currency per one
unit of the reference currency) over HTTP and caches it. The
ledger only ever reads the cached table.

Failure handling:
- a failed, timed-out or malformed fetch keeps the last good
  table and is logged, never raised to the caller
- the cache is assigned only after a complete, parsed response,
  so cancelling an in-flight fetch leaves it untouched
"""

import asyncio
import time
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

import httpx
import structlog

from personal_ledger.config import get_settings
from personal_ledger.services.currency import to_decimal

logger = structlog.get_logger(__name__)


# Fallback table anchored to USD, used until the first successful fetch.
DEFAULT_RATES: dict[str, Decimal] = {
    code: Decimal(rate) for code, rate in {
        # Base
        "USD": "1",
        # Americas
        "HNL": "24.5", "MXN": "17.05", "BRL": "5.25", "ARS": "950",
        "COP": "4200", "PEN": "3.7", "GTQ": "7.8", "CRC": "500",
        "PAB": "1", "NIO": "36.5", "DOP": "58", "UYU": "42",
        "BOB": "6.9", "PYG": "7200", "VES": "2000000", "CAD": "1.35",
        # Europe
        "EUR": "0.92", "GBP": "0.79", "CHF": "0.88", "SEK": "10.5",
        "NOK": "10.6", "DKK": "6.85", "PLN": "4", "CZK": "24",
        "HUF": "375", "RON": "4.6", "RUB": "98", "TRY": "33", "UAH": "40",
        # Asia and Pacific
        "CNY": "7.1", "JPY": "150", "KRW": "1300", "INR": "83",
        "IDR": "15500", "THB": "35", "MYR": "4.7", "SGD": "1.35",
        "HKD": "7.8", "AUD": "1.5", "NZD": "1.65", "PHP": "56",
        "VND": "24500", "PKR": "278", "BDT": "109", "LKR": "333",
        # Middle East and Africa
        "AED": "3.67", "SAR": "3.75", "QAR": "3.64", "KWD": "0.31",
        "BHD": "0.377", "OMR": "0.385", "JOD": "0.71", "ILS": "3.65",
        "EGP": "48", "NGN": "1540", "KES": "157", "GHS": "14", "ZAR": "18",
    }.items()
}


class ExchangeRateService:
    """
    Cached rate table with on-demand and periodic refresh.

    The transport argument lets tests swap in httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str | None = None,
        reference_currency: str | None = None,
        refresh_seconds: int | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.RATES_API_URL).rstrip("/")
        self.reference_currency = reference_currency or settings.REFERENCE_CURRENCY
        self.refresh_seconds = (
            refresh_seconds if refresh_seconds is not None
            else settings.RATES_REFRESH_SECONDS
        )
        self.timeout_seconds = timeout_seconds or settings.RATES_TIMEOUT_SECONDS
        self._transport = transport
        self._clock = clock
        self._rates: dict[str, Decimal] = dict(DEFAULT_RATES)
        self._last_update: float | None = None

    @property
    def cached_rates(self) -> dict[str, Decimal]:
        """Copy of the latest good table. Never triggers a fetch."""
        return dict(self._rates)

    @property
    def last_update(self) -> float | None:
        return self._last_update

    def is_stale(self) -> bool:
        if self._last_update is None:
            return True
        return self._clock() - self._last_update > self.refresh_seconds

    async def _fetch(self) -> dict[str, Decimal]:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport
        ) as client:
            response = await client.get(f"{self.base_url}/{self.reference_currency}")
            response.raise_for_status()
            data = response.json()

        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict) or not rates:
            raise ValueError("Rate payload has no 'rates' table")

        parsed = {str(code): to_decimal(rate) for code, rate in rates.items()}
        parsed[self.reference_currency] = Decimal("1")
        return parsed

    async def refresh(self) -> dict[str, Decimal]:
        """
        Fetch a fresh table now.

        Returns the new table on success, the cached one otherwise.
        """
        try:
            rates = await self._fetch()
        except (httpx.HTTPError, ValueError, TypeError, InvalidOperation) as e:
            logger.warning(
                "rates_fetch_failed",
                error=str(e),
                error_type=type(e).__name__,
                reference_currency=self.reference_currency,
            )
            return self.cached_rates

        self._rates = rates
        self._last_update = self._clock()
        logger.info(
            "rates_refreshed",
            reference_currency=self.reference_currency,
            currencies=len(rates),
        )
        return self.cached_rates

    async def get_rates(self) -> dict[str, Decimal]:
        """Cached table, refreshed first if older than the refresh interval."""
        if self.is_stale():
            return await self.refresh()
        return self.cached_rates

    async def run_periodic(self, interval_seconds: float | None = None) -> None:
        """Refresh forever on a fixed interval. Cancel the task to stop."""
        interval = (
            interval_seconds if interval_seconds is not None
            else self.refresh_seconds
        )
        while True:
            await self.refresh()
            await asyncio.sleep(interval)
