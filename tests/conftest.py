"""
Pytest configuration and fixtures for the trade ledger tests.

This module provides:
- In-memory SQLite engine fixtures (and a file-backed one for threads)
- Deterministic quote store
- Ledger engine, trading service and API client fixtures
- Store-fault injection helpers
"""

from decimal import Decimal
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.exc import OperationalError

from trade_ledger.config.settings import Settings, reset_settings
from trade_ledger.core.timezone import now_eastern
from trade_ledger.domain.views import Quote
from trade_ledger.main import create_app
from trade_ledger.providers.stub_provider import StubQuoteStore
from trade_ledger.repositories.sqlalchemy import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
)
from trade_ledger.services import PortfolioLedgerEngine, TradingService


ACCOUNT_ID = "test-account"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    """Session factory bound to the in-memory test database."""
    return create_session_factory(test_engine)


@pytest.fixture(scope="function")
def file_engine(tmp_path):
    """File-backed SQLite engine; needed when several threads hit the store at once."""
    engine = create_db_engine(
        f"sqlite:///{tmp_path / 'ledger.db'}",
        busy_timeout_seconds=30,
    )
    init_db(engine)
    yield engine
    engine.dispose()


# =============================================================================
# QUOTE FIXTURES
# =============================================================================


FIXED_PRICES = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "TSLA": Decimal("248.75"),
}


@pytest.fixture
def quote_store() -> StubQuoteStore:
    """Quote store with a small fixed set of prices."""
    as_of = now_eastern()
    return StubQuoteStore(
        {
            symbol: Quote(symbol=symbol, name=f"{symbol} Corp", price=price, as_of=as_of)
            for symbol, price in FIXED_PRICES.items()
        }
    )


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_engine(session_factory, quote_store) -> PortfolioLedgerEngine:
    """Provide test PortfolioLedgerEngine."""
    return PortfolioLedgerEngine(
        session_factory=session_factory,
        quote_store=quote_store,
    )


@pytest.fixture
def trading_service(ledger_engine) -> TradingService:
    """Provide test TradingService."""
    return TradingService(engine=ledger_engine)


@pytest.fixture
def buy(ledger_engine) -> Callable:
    """Shortcut for executing a BUY on the test account."""

    def _buy(symbol: str, quantity, price, account_id: str = ACCOUNT_ID):
        return ledger_engine.execute_trade(account_id, symbol, "BUY", quantity, price)

    return _buy


@pytest.fixture
def sell(ledger_engine) -> Callable:
    """Shortcut for executing a SELL on the test account."""

    def _sell(symbol: str, quantity, price, account_id: str = ACCOUNT_ID):
        return ledger_engine.execute_trade(account_id, symbol, "SELL", quantity, price)

    return _sell


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def client(test_engine, quote_store) -> TestClient:
    """Provide FastAPI test client over the in-memory test database."""
    app = create_app(
        settings=Settings(database_url="sqlite://"),
        db_engine=test_engine,
        quote_store=quote_store,
    )
    return TestClient(app)


# =============================================================================
# FAULT INJECTION
# =============================================================================


def raise_store_failure(*args, **kwargs):
    """Stand-in for a repository method when the store connection drops."""
    raise OperationalError("INSERT", {}, Exception("disk I/O error"))


# =============================================================================
# ASSERTION HELPERS
# =============================================================================


def assert_decimal_equal(actual: Decimal, expected: Decimal, places: str = "0.01") -> None:
    """Compare decimals after rounding both to the given precision."""
    quantum = Decimal(places)
    assert actual.quantize(quantum) == expected.quantize(quantum), f"{actual} != {expected}"
