"""
Tests for currency conversion and budget aggregate recalculation.
"""

from datetime import date, datetime
from decimal import Decimal

from personal_ledger.models.enums import TransactionType, TRANSFER_CATEGORY_ID
from personal_ledger.models.transaction import Transaction
from personal_ledger.services.aggregates import calculate_budget_spent
from personal_ledger.services.currency import convert, get_rate


RATES = {"USD": Decimal("1"), "EUR": Decimal("0.5"), "JPY": 100.0, "XXX": 0}


def make_transaction(amount, category_id="food", on=date(2024, 3, 10),
                     transaction_type=TransactionType.EXPENSE):
    now = datetime(2024, 3, 10)
    return Transaction(
        id=f"t-{amount}-{category_id}-{on}",
        type=transaction_type,
        amount=Decimal(amount),
        category_id=category_id,
        date=on,
        created_at=now,
        updated_at=now,
    )


class TestConvert:

    def test_same_currency_is_identity(self):
        amount = Decimal("12.3456")
        assert convert(amount, "EUR", "EUR", RATES) is amount

    def test_through_reference(self):
        assert convert(Decimal("10"), "EUR", "USD", RATES) == Decimal("20")
        assert convert(Decimal("10"), "USD", "JPY", RATES) == Decimal("1000")
        assert convert(Decimal("50"), "EUR", "JPY", RATES) == Decimal("10000")

    def test_missing_rate_treated_as_one(self):
        assert convert(Decimal("10"), "GBP", "USD", RATES) == Decimal("10")

    def test_zero_rate_treated_as_one(self):
        assert get_rate(RATES, "XXX") == Decimal("1")
        assert convert(Decimal("10"), "XXX", "EUR", RATES) == Decimal("5")

    def test_float_rates_have_no_binary_noise(self):
        assert get_rate({"ABC": 0.1}, "ABC") == Decimal("0.1")


class TestCalculateBudgetSpent:

    def test_sums_matching_expenses(self):
        transactions = [
            make_transaction("10"),
            make_transaction("5", category_id="transport"),
            make_transaction("7", category_id="rent"),
        ]
        spent = calculate_budget_spent(
            transactions, {"food", "transport"}, date(2024, 3, 1), date(2024, 3, 31)
        )
        assert spent == Decimal("15")

    def test_window_is_inclusive(self):
        transactions = [
            make_transaction("1", on=date(2024, 3, 1)),
            make_transaction("2", on=date(2024, 3, 31)),
            make_transaction("4", on=date(2024, 4, 1)),
        ]
        spent = calculate_budget_spent(
            transactions, {"food"}, date(2024, 3, 1), date(2024, 3, 31)
        )
        assert spent == Decimal("3")

    def test_income_and_transfers_excluded(self):
        transactions = [
            make_transaction("10", transaction_type=TransactionType.INCOME),
            make_transaction("20", category_id=TRANSFER_CATEGORY_ID),
        ]
        spent = calculate_budget_spent(
            transactions,
            {"food", TRANSFER_CATEGORY_ID},
            date(2024, 3, 1),
            date(2024, 3, 31),
        )
        assert spent == Decimal("0")

    def test_empty_log(self):
        assert calculate_budget_spent(
            [], {"food"}, date(2024, 3, 1), date(2024, 3, 31)
        ) == Decimal("0")
