"""Quote store protocol."""

from typing import Protocol, Optional

from trade_ledger.domain.views import Quote


class QuoteStore(Protocol):
    """
    Protocol for the read side of the market-data feed.

    The feed refreshes prices on its own schedule; the ledger only reads the
    latest price per symbol and never coordinates with the refresh.
    """

    def current_quote(self, symbol: str) -> Optional[Quote]:
        """
        Return the latest quote for a symbol.

        Returns None when the symbol is unknown or has no price yet.
        """
        ...

    def list_quotes(self) -> list[Quote]:
        """Return every known quote, ordered by symbol."""
        ...
