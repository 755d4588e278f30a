"""Enumerations for domain models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a trade."""

    BUY = "BUY"
    SELL = "SELL"


class TradeOutcome(str, Enum):
    """How a trade request was resolved."""

    EXECUTED = "EXECUTED"
    REJECTED = "REJECTED"  # business rule (funds, shares)
    INVALID = "INVALID"  # malformed request, never reached the store
