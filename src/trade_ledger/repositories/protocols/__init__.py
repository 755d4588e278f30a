"""Repository protocol definitions (interfaces)."""

from trade_ledger.repositories.protocols.portfolio_repo import PortfolioRepository
from trade_ledger.repositories.protocols.holding_repo import HoldingRepository
from trade_ledger.repositories.protocols.transaction_repo import TransactionRepository
from trade_ledger.repositories.protocols.history_repo import HistoryRepository

__all__ = [
    "PortfolioRepository",
    "HoldingRepository",
    "TransactionRepository",
    "HistoryRepository",
]
