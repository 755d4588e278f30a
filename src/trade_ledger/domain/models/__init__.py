"""Domain models package."""

from trade_ledger.domain.models.enums import TradeSide, TradeOutcome
from trade_ledger.domain.models.portfolio import Portfolio, Holding
from trade_ledger.domain.models.transaction import Transaction, PortfolioSnapshot

__all__ = [
    "TradeSide",
    "TradeOutcome",
    "Portfolio",
    "Holding",
    "Transaction",
    "PortfolioSnapshot",
]
