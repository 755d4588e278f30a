"""Pydantic schemas for API request/response."""

from trade_ledger.api.schemas.portfolio import (
    PortfolioResponse,
    HoldingResponse,
    TransactionResponse,
    HistoryPointResponse,
    TradeRequest,
    TradeResponse,
)
from trade_ledger.api.schemas.stock import QuoteResponse

__all__ = [
    "PortfolioResponse",
    "HoldingResponse",
    "TransactionResponse",
    "HistoryPointResponse",
    "TradeRequest",
    "TradeResponse",
    "QuoteResponse",
]
