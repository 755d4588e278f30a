"""Repository layer - data access abstractions and implementations."""

from trade_ledger.repositories.protocols import (
    PortfolioRepository,
    HoldingRepository,
    TransactionRepository,
    HistoryRepository,
)

__all__ = [
    "PortfolioRepository",
    "HoldingRepository",
    "TransactionRepository",
    "HistoryRepository",
]
