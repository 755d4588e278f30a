"""Domain layer - pure business models with no external dependencies."""

from trade_ledger.domain.models import (
    Portfolio,
    Holding,
    Transaction,
    PortfolioSnapshot,
    TradeSide,
    TradeOutcome,
)

__all__ = [
    "Portfolio",
    "Holding",
    "Transaction",
    "PortfolioSnapshot",
    "TradeSide",
    "TradeOutcome",
]
