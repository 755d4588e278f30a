"""Pydantic schemas for portfolio endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from trade_ledger.domain.models.enums import TradeSide


class PortfolioResponse(BaseModel):
    """Cash and valuation summary for the account."""

    model_config = {"from_attributes": True}

    account_id: str
    cash_balance: float
    total_value: float
    total_pnl: float
    created_at_est: Optional[datetime] = None
    updated_at_est: Optional[datetime] = None


class HoldingResponse(BaseModel):
    """An open position valued at the current quote (price fields null when no quote)."""

    model_config = {"from_attributes": True}

    symbol: str
    name: Optional[str] = None
    quantity: float
    average_cost: float
    current_price: Optional[float] = None
    current_value: float
    unrealized_pnl: Optional[float] = None
    quote_available: bool


class TransactionResponse(BaseModel):
    """One executed trade."""

    model_config = {"from_attributes": True}

    txn_id: int
    symbol: str
    side: TradeSide
    quantity: float
    price: float
    total: float
    timestamp_est: datetime


class HistoryPointResponse(BaseModel):
    """One valuation snapshot at day granularity."""

    model_config = {"from_attributes": True}

    date: date
    total_value: float
    cash_balance: float
    holdings_value: float
    stale: bool = False


class TradeRequest(BaseModel):
    """Request schema for placing a trade."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Stock symbol")
    type: TradeSide = Field(..., description="BUY or SELL")
    quantity: Decimal = Field(..., gt=0, description="Number of shares")
    price: Decimal = Field(..., gt=0, description="Price per share")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TradeResponse(BaseModel):
    """Outcome of a trade request."""

    success: bool
    message: str
