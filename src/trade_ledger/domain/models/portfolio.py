"""Portfolio and Holding domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Portfolio:
    """
    Cash and valuation summary for one account.

    Created lazily with the starting cash balance. cash_balance never goes
    negative; total_value and total_pnl are refreshed by revaluation only.
    """

    account_id: str
    cash_balance: Decimal
    total_value: Decimal
    total_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at_est: Optional[datetime] = field(default=None)
    updated_at_est: Optional[datetime] = field(default=None)


@dataclass
class Holding:
    """
    Open position in one symbol for one account.

    quantity is always positive; a position sold down to zero is deleted.
    average_cost is the volume-weighted average of buy fills.
    """

    account_id: str
    symbol: str
    quantity: Decimal
    average_cost: Decimal

    @property
    def cost_basis(self) -> Decimal:
        """Total amount paid for the shares still held."""
        return self.quantity * self.average_cost
