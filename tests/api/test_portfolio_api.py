"""
API tests for portfolio endpoints.

Tests cover:
- Portfolio, holdings, transactions and history reads
- Trade placement (executed, rejected, invalid)
- Request validation (422) and store faults (503)
"""

import pytest
from fastapi.testclient import TestClient

from trade_ledger.repositories.sqlalchemy import SqlAlchemyTransactionRepository

from tests.conftest import raise_store_failure


HEADERS = {"user-id": "api-user"}


def trade(client: TestClient, symbol: str, side: str, quantity, price, headers=HEADERS):
    return client.post(
        "/portfolio/trade",
        json={"symbol": symbol, "type": side, "quantity": quantity, "price": price},
        headers=headers,
    )


# =============================================================================
# READ ENDPOINT TESTS
# =============================================================================


class TestGetPortfolioAPI:
    """Tests for GET /portfolio."""

    def test_new_account_gets_starting_balance(self, client: TestClient):
        """
        GIVEN an account that never traded
        WHEN I GET /portfolio
        THEN it is opened with 10000 cash
        """
        response = client.get("/portfolio", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["account_id"] == "api-user"
        assert data["cash_balance"] == 10000
        assert data["total_value"] == 10000
        assert data["total_pnl"] == 0

    def test_missing_header_uses_default_account(self, client: TestClient):
        response = client.get("/portfolio")

        assert response.status_code == 200
        assert response.json()["account_id"] == "default-user"


class TestHoldingsAndTransactionsAPI:
    """Tests for GET /portfolio/holdings and /portfolio/transactions."""

    def test_holdings_after_buy(self, client: TestClient):
        trade(client, "AAPL", "BUY", 10, 150)

        response = client.get("/portfolio/holdings", headers=HEADERS)

        assert response.status_code == 200
        holdings = response.json()
        assert len(holdings) == 1
        assert holdings[0]["symbol"] == "AAPL"
        assert holdings[0]["quantity"] == 10
        assert holdings[0]["average_cost"] == 150
        assert holdings[0]["current_price"] == 185.5
        assert holdings[0]["current_value"] == 1855
        assert holdings[0]["quote_available"] is True

    def test_transactions_newest_first(self, client: TestClient):
        trade(client, "AAPL", "BUY", 10, 150)
        trade(client, "AAPL", "SELL", 4, 160)

        response = client.get("/portfolio/transactions", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert [t["side"] for t in data] == ["SELL", "BUY"]
        assert data[0]["total"] == 640

    def test_history_after_trade(self, client: TestClient):
        trade(client, "AAPL", "BUY", 10, 150)

        response = client.get("/portfolio/history", headers=HEADERS)

        assert response.status_code == 200
        points = response.json()
        assert len(points) == 1
        assert points[0]["total_value"] == 10355
        assert points[0]["stale"] is False
        assert "date" in points[0]


# =============================================================================
# TRADE ENDPOINT TESTS
# =============================================================================


class TestTradeAPI:
    """Tests for POST /portfolio/trade."""

    def test_buy_executes_and_revalues(self, client: TestClient):
        """
        GIVEN a new account
        WHEN I BUY 10 AAPL @ 150 (quote 185.50)
        THEN cash is 8500 and the revalued total is 10355
        """
        response = trade(client, "aapl", "BUY", 10, 150)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Trade executed successfully"}

        portfolio = client.get("/portfolio", headers=HEADERS).json()
        assert portfolio["cash_balance"] == 8500
        assert portfolio["total_value"] == 10355
        assert portfolio["total_pnl"] == 355

    def test_insufficient_funds_is_rejected(self, client: TestClient):
        response = trade(client, "AAPL", "BUY", 100, 150)

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Insufficient funds"}

    def test_insufficient_shares_is_rejected(self, client: TestClient):
        response = trade(client, "AAPL", "SELL", 1, 150)

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Insufficient shares"}

    def test_unknown_symbol_is_invalid(self, client: TestClient):
        response = trade(client, "ZZZZ", "BUY", 1, 10)

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Invalid trade request"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"symbol": "AAPL", "type": "BUY", "quantity": 0, "price": 150},
            {"symbol": "AAPL", "type": "BUY", "quantity": 1, "price": -5},
            {"symbol": "AAPL", "type": "HOLD", "quantity": 1, "price": 150},
            {"symbol": "", "type": "BUY", "quantity": 1, "price": 150},
            {"type": "BUY", "quantity": 1, "price": 150},
        ],
    )
    def test_malformed_request_returns_422(self, client: TestClient, payload):
        response = client.post("/portfolio/trade", json=payload, headers=HEADERS)

        assert response.status_code == 422

    def test_store_failure_returns_503(self, client: TestClient, monkeypatch):
        """
        GIVEN the store fails while writing the trade
        WHEN I POST a trade
        THEN the response is 503 and nothing was applied
        """
        monkeypatch.setattr(SqlAlchemyTransactionRepository, "create", raise_store_failure)

        response = trade(client, "AAPL", "BUY", 10, 150)

        assert response.status_code == 503
        assert response.json() == {"success": False, "message": "Trade execution failed"}

        monkeypatch.undo()
        assert client.get("/portfolio", headers=HEADERS).json()["cash_balance"] == 10000
