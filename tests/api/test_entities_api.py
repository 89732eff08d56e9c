"""
Tests for account, budget, goal, category and recurring
payment endpoints.
"""

from decimal import Decimal


class TestAccounts:

    def test_credit_account(self, client):
        response = client.post("/accounts", json={
            "title": "Card",
            "type": "credit",
            "balance": "-100",
            "credit_limit": "1000",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "credit"
        assert Decimal(data["available_credit"]) == Decimal("900")

    def test_invalid_currency_returns_422(self, client):
        response = client.post("/accounts", json={"title": "X", "currency": "EURO"})
        assert response.status_code == 422

    def test_list_hides_archived_on_request(self, client):
        client.post("/accounts", json={"title": "Open"})
        client.post("/accounts", json={"title": "Closed", "is_archived": True})

        assert len(client.get("/accounts").json()) == 2
        visible = client.get("/accounts", params={"include_archived": False}).json()
        assert [a["title"] for a in visible] == ["Open"]

    def test_balance_override(self, client):
        account = client.post("/accounts", json={"title": "Cash"}).json()
        response = client.patch(f"/accounts/{account['id']}", json={"balance": "42"})
        assert Decimal(response.json()["balance"]) == Decimal("42")

    def test_account_transactions(self, client):
        account = client.post("/accounts", json={"title": "Cash"}).json()
        client.post("/transactions", json={
            "type": "income", "amount": "5", "category_id": "salary",
            "account_id": account["id"],
        })
        response = client.get(f"/accounts/{account['id']}/transactions")
        assert len(response.json()) == 1

    def test_unknown_account_returns_404(self, client):
        assert client.get("/accounts/missing").status_code == 404
        assert client.get("/accounts/missing/transactions").status_code == 404
        assert client.patch("/accounts/missing", json={"title": "x"}).status_code == 404


class TestBudgets:

    def _budget(self, client, **extra):
        return client.post("/budgets", json={
            "category_ids": ["food"],
            "amount": "300",
            "start_date": "2024-03-01",
            "end_date": "2024-03-31",
            **extra,
        })

    def test_create_starts_at_zero(self, client):
        response = self._budget(client)
        assert response.status_code == 201
        assert Decimal(response.json()["spent"]) == Decimal("0")

    def test_reversed_window_returns_422(self, client):
        response = self._budget(client, start_date="2024-04-01")
        assert response.status_code == 422

    def test_expense_then_recalculate(self, client):
        client.post("/transactions", json={
            "type": "expense", "amount": "45", "category_id": "food",
            "date": "2024-03-02",
        })
        budget = self._budget(client).json()

        response = client.post("/budgets/recalculate")
        assert response.status_code == 200
        spent = client.get(f"/budgets/{budget['id']}").json()["spent"]
        assert Decimal(spent) == Decimal("45")

    def test_update_and_delete(self, client):
        budget = self._budget(client).json()
        response = client.patch(f"/budgets/{budget['id']}", json={"amount": "10"})
        assert Decimal(response.json()["amount"]) == Decimal("10")

        assert client.delete(f"/budgets/{budget['id']}").status_code == 204
        assert client.get(f"/budgets/{budget['id']}").status_code == 404


class TestGoals:

    def test_contribution(self, client):
        goal = client.post("/goals", json={
            "name": "Bike",
            "target_amount": "400",
            "target_date": "2024-12-01",
        }).json()

        response = client.post(
            f"/goals/{goal['id']}/contributions", json={"amount": "100"}
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["current_amount"]) == Decimal("100")
        assert data["is_completed"] is False

    def test_negative_contribution_returns_422(self, client):
        goal = client.post("/goals", json={
            "name": "Bike",
            "target_amount": "400",
            "target_date": "2024-12-01",
        }).json()
        response = client.post(
            f"/goals/{goal['id']}/contributions", json={"amount": "-5"}
        )
        assert response.status_code == 422

    def test_unknown_goal_returns_404(self, client):
        response = client.post("/goals/missing/contributions", json={"amount": "5"})
        assert response.status_code == 404


class TestCategories:

    def test_defaults_seeded_once(self, client):
        first = client.post("/categories/defaults").json()
        second = client.post("/categories/defaults").json()
        assert len(first) == len(second) > 0

    def test_default_category_survives_delete(self, client):
        default = client.post("/categories/defaults").json()[0]
        assert client.delete(f"/categories/{default['id']}").status_code == 204
        ids = [c["id"] for c in client.get("/categories").json()]
        assert default["id"] in ids

    def test_user_category_crud(self, client):
        category = client.post("/categories", json={
            "name": "Pets", "type": "expense",
        }).json()
        response = client.patch(
            f"/categories/{category['id']}", json={"name": "Pet care"}
        )
        assert response.json()["name"] == "Pet care"

        client.delete(f"/categories/{category['id']}")
        assert client.get("/categories").json() == []


class TestRecurringPayments:

    def _payment(self, client, **extra):
        return client.post("/recurring-payments", json={
            "amount": "15",
            "category_id": "entertainment",
            "frequency": "monthly",
            "next_date": "2023-01-31",
            **extra,
        }).json()

    def test_occurrences(self, client):
        payment = self._payment(client)
        response = client.get(
            f"/recurring-payments/{payment['id']}/occurrences",
            params={"start_date": "2023-02-01", "end_date": "2023-02-28"},
        )
        assert response.status_code == 200
        assert response.json()["occurrences"] == ["2023-02-28"]

    def test_upcoming(self, client):
        payment = self._payment(client, next_date="2024-03-20")
        response = client.get(
            "/recurring-payments/upcoming",
            params={"today": "2024-03-14", "days": 7},
        )
        assert [p["payment_id"] for p in response.json()] == [payment["id"]]

    def test_unknown_frequency_returns_422(self, client):
        response = client.post("/recurring-payments", json={
            "amount": "15",
            "category_id": "entertainment",
            "frequency": "hourly",
            "next_date": "2024-01-01",
        })
        assert response.status_code == 422

    def test_unknown_payment_returns_404(self, client):
        response = client.get(
            "/recurring-payments/missing/occurrences",
            params={"start_date": "2023-02-01", "end_date": "2023-02-28"},
        )
        assert response.status_code == 404
