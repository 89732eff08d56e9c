"""
Tests for the reporting queries.

The ledger fixture carries a fixed rate table:
1 USD = 0.5 EUR = 100 JPY.
"""

from datetime import date
from decimal import Decimal

from personal_ledger.models.enums import Frequency, TransactionType
from personal_ledger.schemas.account import AccountCreate
from personal_ledger.schemas.recurring_payment import RecurringPaymentCreate
from personal_ledger.schemas.transaction import TransactionCreate, TransferRequest

MARCH_START = date(2024, 3, 1)
MARCH_END = date(2024, 3, 31)


def add(ledger, transaction_type, amount, category_id, account_id=None,
        on=date(2024, 3, 10)):
    return ledger.add_transaction(TransactionCreate(
        type=transaction_type,
        amount=Decimal(amount),
        category_id=category_id,
        account_id=account_id,
        date=on,
    ))


class TestTotalBalance:

    def test_converts_into_requested_currency(self, ledger):
        ledger.add_account(AccountCreate(title="USD", balance=Decimal("100")))
        ledger.add_account(AccountCreate(
            title="EUR", currency="EUR", balance=Decimal("50")
        ))

        total = ledger.total_balance("USD")
        assert total.total == Decimal("200")
        assert total.account_count == 2

    def test_skips_archived_and_excluded(self, ledger):
        ledger.add_account(AccountCreate(title="Main", balance=Decimal("100")))
        ledger.add_account(AccountCreate(
            title="Old", balance=Decimal("999"), is_archived=True
        ))
        ledger.add_account(AccountCreate(
            title="Hidden", balance=Decimal("999"), include_in_total=False
        ))

        assert ledger.total_balance().total == Decimal("100")

    def test_defaults_to_preferred_currency(self, ledger):
        ledger.add_account(AccountCreate(title="Main", balance=Decimal("10")))
        ledger.set_preferred_currency("JPY")

        total = ledger.total_balance()
        assert total.currency == "JPY"
        assert total.total == Decimal("1000")


class TestPeriodSummary:

    def test_income_expense_net(self, ledger):
        add(ledger, TransactionType.INCOME, "1000", "salary")
        add(ledger, TransactionType.EXPENSE, "250", "food")
        add(ledger, TransactionType.EXPENSE, "75", "food", on=date(2024, 4, 2))

        summary = ledger.period_summary(MARCH_START, MARCH_END)
        assert summary.income == Decimal("1000")
        assert summary.expense == Decimal("250")
        assert summary.net == Decimal("750")

    def test_transfers_excluded(self, ledger):
        a = ledger.add_account(AccountCreate(title="A", balance=Decimal("100")))
        b = ledger.add_account(AccountCreate(title="B"))
        ledger.transfer_money(TransferRequest(
            source_account_id=a.id,
            destination_account_id=b.id,
            amount=Decimal("40"),
            date=date(2024, 3, 5),
        ))

        summary = ledger.period_summary(MARCH_START, MARCH_END)
        assert summary.income == summary.expense == Decimal("0")

    def test_uses_account_currency(self, ledger):
        eur = ledger.add_account(AccountCreate(title="EUR", currency="EUR"))
        add(ledger, TransactionType.EXPENSE, "10", "food", account_id=eur.id)

        summary = ledger.period_summary(MARCH_START, MARCH_END, "USD")
        assert summary.expense == Decimal("20")


class TestCategoryBreakdown:

    def test_totals_and_percentages(self, ledger):
        add(ledger, TransactionType.EXPENSE, "75", "food")
        add(ledger, TransactionType.EXPENSE, "25", "transport")
        add(ledger, TransactionType.INCOME, "500", "salary")

        breakdown = ledger.category_breakdown(MARCH_START, MARCH_END)

        assert breakdown.total == Decimal("100")
        assert [c.category_id for c in breakdown.categories] == ["food", "transport"]
        assert breakdown.categories[0].percentage == Decimal("75.00")

    def test_income_breakdown(self, ledger):
        add(ledger, TransactionType.INCOME, "500", "salary")
        breakdown = ledger.category_breakdown(
            MARCH_START, MARCH_END, TransactionType.INCOME
        )
        assert breakdown.categories[0].category_id == "salary"
        assert breakdown.categories[0].percentage == Decimal("100.00")

    def test_empty_window(self, ledger):
        breakdown = ledger.category_breakdown(MARCH_START, MARCH_END)
        assert breakdown.total == Decimal("0")
        assert breakdown.categories == []


class TestUpcomingPayments:

    def _payment(self, ledger, frequency, next_date, **kwargs):
        return ledger.add_recurring_payment(RecurringPaymentCreate(
            amount=Decimal("9.99"),
            category_id="entertainment",
            frequency=frequency,
            next_date=next_date,
            **kwargs,
        ))

    def test_sorted_by_due_date(self, ledger):
        later = self._payment(ledger, Frequency.MONTHLY, date(2024, 1, 20))
        sooner = self._payment(ledger, Frequency.WEEKLY, date(2024, 3, 1))

        upcoming = ledger.upcoming_payments(today=date(2024, 3, 14), days=7)

        assert [p.payment_id for p in upcoming] == [sooner.id, later.id]
        assert upcoming[0].due_date == date(2024, 3, 15)
        assert upcoming[0].days_until == 1
        assert upcoming[1].due_date == date(2024, 3, 20)

    def test_inactive_and_distant_skipped(self, ledger):
        self._payment(ledger, Frequency.WEEKLY, date(2024, 3, 1), is_active=False)
        self._payment(ledger, Frequency.YEARLY, date(2024, 9, 1))

        assert ledger.upcoming_payments(today=date(2024, 3, 14), days=7) == []
