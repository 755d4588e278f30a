"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header, Request

from trade_ledger.config.settings import get_settings
from trade_ledger.providers.quote_provider import QuoteStore
from trade_ledger.services import PortfolioLedgerEngine, TradingService


def get_ledger_engine(request: Request) -> PortfolioLedgerEngine:
    """Provide the PortfolioLedgerEngine built by create_app."""
    return request.app.state.ledger_engine


def get_quote_store(request: Request) -> QuoteStore:
    """Provide the QuoteStore built by create_app."""
    return request.app.state.quote_store


def get_trading_service(
    engine: PortfolioLedgerEngine = Depends(get_ledger_engine),
) -> TradingService:
    """Provide TradingService instance."""
    return TradingService(engine=engine)


def get_account_id(user_id: Optional[str] = Header(default=None, alias="user-id")) -> str:
    """Resolve the account from the user-id header, falling back to the default account."""
    return user_id or get_settings().default_account_id
