"""View models for service outputs."""

from trade_ledger.domain.views.portfolio import (
    Quote,
    HoldingView,
    TradeResult,
    Revaluation,
    HistoryPoint,
)

__all__ = [
    "Quote",
    "HoldingView",
    "TradeResult",
    "Revaluation",
    "HistoryPoint",
]
