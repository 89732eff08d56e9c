"""
Tests for the exchange rate collaborator.

The HTTP layer is replaced with httpx.MockTransport, and the
async methods are driven with asyncio.run.
"""

import asyncio
from decimal import Decimal

import httpx

from personal_ledger.services.exchange_rates import DEFAULT_RATES, ExchangeRateService


class FakeClock:

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_service(handler, clock=None, refresh_seconds=3600):
    return ExchangeRateService(
        base_url="https://rates.test/latest",
        reference_currency="USD",
        refresh_seconds=refresh_seconds,
        timeout_seconds=1,
        transport=httpx.MockTransport(handler),
        clock=clock or FakeClock(),
    )


def ok_handler(request):
    return httpx.Response(200, json={
        "base": "USD",
        "rates": {"USD": 1, "EUR": 0.9, "HNL": 24.7},
    })


class TestRefresh:

    def test_starts_with_default_table(self):
        service = make_service(ok_handler)
        assert service.cached_rates == DEFAULT_RATES
        assert service.is_stale() is True

    def test_successful_refresh_replaces_table(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return ok_handler(request)

        service = make_service(handler)
        rates = asyncio.run(service.refresh())

        assert requested == ["https://rates.test/latest/USD"]
        assert rates == {
            "USD": Decimal("1"),
            "EUR": Decimal("0.9"),
            "HNL": Decimal("24.7"),
        }
        assert service.cached_rates == rates
        assert service.is_stale() is False

    def test_http_error_keeps_cache(self):
        service = make_service(lambda request: httpx.Response(503))
        rates = asyncio.run(service.refresh())

        assert rates == DEFAULT_RATES
        assert service.last_update is None

    def test_malformed_payload_keeps_cache(self):
        service = make_service(
            lambda request: httpx.Response(200, json={"result": "error"})
        )
        assert asyncio.run(service.refresh()) == DEFAULT_RATES

    def test_non_numeric_rate_keeps_cache(self):
        service = make_service(
            lambda request: httpx.Response(200, json={"rates": {"EUR": "abc"}})
        )
        assert asyncio.run(service.refresh()) == DEFAULT_RATES

    def test_transport_error_keeps_last_good_table(self):
        calls = {"n": 0}

        def flaky(request):
            calls["n"] += 1
            if calls["n"] > 1:
                raise httpx.ConnectError("down", request=request)
            return ok_handler(request)

        service = make_service(flaky)
        good = asyncio.run(service.refresh())
        after_failure = asyncio.run(service.refresh())

        assert after_failure == good


class TestGetRates:

    def test_fetches_only_when_stale(self):
        calls = []

        def handler(request):
            calls.append(request)
            return ok_handler(request)

        clock = FakeClock()
        service = make_service(handler, clock=clock, refresh_seconds=60)

        asyncio.run(service.get_rates())
        asyncio.run(service.get_rates())
        assert len(calls) == 1

        clock.now += 61
        asyncio.run(service.get_rates())
        assert len(calls) == 2
