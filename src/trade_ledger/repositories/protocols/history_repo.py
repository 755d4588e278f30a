"""Portfolio history repository protocol."""

from typing import Protocol

from trade_ledger.domain.models import PortfolioSnapshot


class HistoryRepository(Protocol):
    """Interface for the append-only valuation log."""

    def create(self, snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
        """Append a snapshot."""
        ...

    def list_recent(self, account_id: str, limit: int) -> list[PortfolioSnapshot]:
        """List at most `limit` snapshots, newest first."""
        ...
