"""Holding repository protocol."""

from typing import Protocol, Optional

from trade_ledger.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def get(self, account_id: str, symbol: str, for_update: bool = False) -> Optional[Holding]:
        """Get the holding for one symbol, optionally row-locked."""
        ...

    def list_open(self, account_id: str) -> list[Holding]:
        """List holdings with quantity > 0, ordered by symbol."""
        ...

    def create(self, holding: Holding) -> Holding:
        """Insert a new holding."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update quantity and average cost of an existing holding."""
        ...

    def delete(self, account_id: str, symbol: str) -> None:
        """Delete a closed holding."""
        ...
