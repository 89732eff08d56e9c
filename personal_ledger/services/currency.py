"""
Currency normalization.

Rates are expressed as units of a currency per one unit of the
reference currency, so the reference itself has rate 1.
Converting goes through the reference:

    amount_in_reference = amount / rate[source]
    result = amount_in_reference * rate[destination]

A code missing from the table converts at rate 1 instead of
failing, so a stale or partial table degrades gracefully.
"""

from collections.abc import Mapping
from decimal import Decimal

RateTable = Mapping[str, Decimal | float | int]

ONE = Decimal("1")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert through str so float rates don't carry binary noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def get_rate(rates: RateTable, currency: str) -> Decimal:
    """Rate for a currency, falling back to 1 when missing or zero."""
    rate = rates.get(currency)
    if not rate:
        return ONE
    return to_decimal(rate)


def convert(
    amount: Decimal,
    source: str,
    destination: str,
    rates: RateTable,
) -> Decimal:
    """Convert an amount between two currency codes."""
    if source == destination:
        return amount

    amount_in_reference = to_decimal(amount) / get_rate(rates, source)
    return amount_in_reference * get_rate(rates, destination)
