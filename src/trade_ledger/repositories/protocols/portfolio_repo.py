"""Portfolio repository protocol."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Optional

from trade_ledger.domain.models import Portfolio


class PortfolioRepository(Protocol):
    """Interface for portfolio data access."""

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        ...

    def get(self, account_id: str, for_update: bool = False) -> Optional[Portfolio]:
        """Retrieve the portfolio for an account, optionally row-locked."""
        ...

    def update_cash(self, account_id: str, cash_balance: Decimal, updated_at: datetime) -> None:
        """Overwrite the cash balance."""
        ...

    def update_valuation(
        self,
        account_id: str,
        total_value: Decimal,
        total_pnl: Decimal,
        updated_at: datetime,
    ) -> None:
        """Overwrite total value and P&L after a revaluation."""
        ...
