"""Core utilities and shared functionality."""

from trade_ledger.core.timezone import (
    now_eastern,
    to_eastern,
    EASTERN_TZ,
)
from trade_ledger.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    TradeRejectedError,
    InsufficientSharesError,
    InsufficientFundsError,
    StorageError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "TradeRejectedError",
    "InsufficientSharesError",
    "InsufficientFundsError",
    "StorageError",
]
