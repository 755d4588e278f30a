"""Transaction and history snapshot domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from trade_ledger.domain.models.enums import TradeSide


@dataclass
class Transaction:
    """
    Executed trade (append-only ledger entry).

    One row is written per successful trade; rows are never edited.
    """

    account_id: str
    symbol: str
    side: TradeSide
    quantity: Decimal
    price: Decimal
    total: Decimal
    timestamp_est: datetime
    txn_id: Optional[int] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            self.side = TradeSide(self.side)

    @property
    def net_cash_impact(self) -> Decimal:
        """
        Cash effect of this trade.

        Positive = cash added, Negative = cash removed.
        """
        if self.side == TradeSide.BUY:
            return -self.total
        return self.total


@dataclass
class PortfolioSnapshot:
    """Valuation of a portfolio at one revaluation event."""

    account_id: str
    timestamp_est: datetime
    total_value: Decimal
    cash_balance: Decimal
    holdings_value: Decimal
    stale: bool = False
    snapshot_id: Optional[int] = field(default=None)
