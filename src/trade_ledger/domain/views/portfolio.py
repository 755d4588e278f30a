"""View models for ledger engine outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from trade_ledger.domain.models.enums import TradeOutcome


@dataclass
class Quote:
    """Latest market quote for a symbol."""

    symbol: str
    price: Decimal
    name: Optional[str] = None
    change: Decimal = field(default_factory=lambda: Decimal("0"))
    change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    as_of: Optional[datetime] = None


@dataclass
class HoldingView:
    """A holding joined with its current quote."""

    symbol: str
    quantity: Decimal
    average_cost: Decimal
    name: Optional[str] = None
    current_price: Optional[Decimal] = None
    current_value: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_pnl: Optional[Decimal] = None

    @property
    def quote_available(self) -> bool:
        """Return True if the value was computed from a live quote."""
        return self.current_price is not None


@dataclass
class TradeResult:
    """Result of a trade request: success flag plus a caller-facing message."""

    success: bool
    message: str
    outcome: TradeOutcome


@dataclass
class Revaluation:
    """Totals written by one revaluation."""

    account_id: str
    total_value: Decimal
    cash_balance: Decimal
    holdings_value: Decimal
    total_pnl: Decimal
    stale_symbols: list[str] = field(default_factory=list)
    as_of: Optional[datetime] = None

    @property
    def stale(self) -> bool:
        return bool(self.stale_symbols)


@dataclass
class HistoryPoint:
    """One day-granularity entry of the valuation history."""

    date: date
    total_value: Decimal
    cash_balance: Decimal
    holdings_value: Decimal
    stale: bool = False
