"""
API tests for quote lookup and health endpoints.

Tests cover:
- Quote listing and single-symbol lookup
- 404 for unknown symbols
- 503 when the quote table cannot be read
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from trade_ledger.config.settings import Settings
from trade_ledger.domain.views import Quote
from trade_ledger.main import create_app
from trade_ledger.repositories.sqlalchemy import SqlAlchemyQuoteStore, create_session_factory
from trade_ledger.repositories.sqlalchemy.orm_models import QuoteORM


@pytest.fixture
def db_quote_client(test_engine) -> TestClient:
    """Client whose quotes come from the stocks table."""
    store = SqlAlchemyQuoteStore(create_session_factory(test_engine))
    store.upsert_quote(Quote(symbol="AAPL", name="Apple Inc.", price=Decimal("185.50")))
    app = create_app(settings=Settings(database_url="sqlite://"), db_engine=test_engine)
    return TestClient(app)


class TestStocksAPI:
    """Tests for GET /stocks and GET /stocks/{symbol}."""

    def test_list_stocks_ordered_by_symbol(self, client: TestClient):
        """
        GIVEN the fixed quote set
        WHEN I GET /stocks
        THEN every quote is returned, ordered by symbol
        """
        response = client.get("/stocks")

        assert response.status_code == 200
        data = response.json()
        assert [q["symbol"] for q in data] == ["AAPL", "GOOGL", "MSFT", "TSLA"]
        assert data[0]["price"] == 185.5

    def test_known_symbol(self, client: TestClient):
        response = client.get("/stocks/AAPL")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["price"] == 185.5
        assert data["name"] == "AAPL Corp"

    def test_lowercase_symbol(self, client: TestClient):
        assert client.get("/stocks/msft").json()["symbol"] == "MSFT"

    def test_unknown_symbol_returns_404(self, client: TestClient):
        response = client.get("/stocks/ZZZZ")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"


class TestStocksFromDatabaseAPI:
    """Tests for the stocks routes backed by the stocks table."""

    def test_list_stocks_from_table(self, db_quote_client: TestClient):
        response = db_quote_client.get("/stocks")

        assert response.status_code == 200
        assert [q["name"] for q in response.json()] == ["Apple Inc."]

    @pytest.mark.parametrize("path", ["/stocks", "/stocks/AAPL"])
    def test_unreadable_table_returns_503(self, db_quote_client: TestClient, test_engine, path):
        """
        GIVEN the stocks table cannot be read
        WHEN I call a stocks route
        THEN the response is 503, not an unhandled 500
        """
        QuoteORM.__table__.drop(bind=test_engine)

        response = db_quote_client.get(path)

        assert response.status_code == 503
        assert response.json()["success"] is False


class TestHealthAPI:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}
