"""Service layer - business logic orchestration."""

from trade_ledger.services.ledger_engine import PortfolioLedgerEngine
from trade_ledger.services.trading_service import TradingService

__all__ = [
    "PortfolioLedgerEngine",
    "TradingService",
]
