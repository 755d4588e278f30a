"""Stub quote store for offline/testing use."""

from decimal import Decimal
from typing import Optional

from trade_ledger.core.timezone import now_eastern
from trade_ledger.domain.views import Quote


# Deterministic fake prices for common symbols: (name, price, prev_close)
_STUB_QUOTES: dict[str, tuple[str, Decimal, Decimal]] = {
    "AAPL": ("Apple Inc.", Decimal("185.50"), Decimal("184.25")),
    "GOOGL": ("Alphabet Inc.", Decimal("142.75"), Decimal("141.50")),
    "MSFT": ("Microsoft Corporation", Decimal("378.25"), Decimal("376.80")),
    "AMZN": ("Amazon.com Inc.", Decimal("178.50"), Decimal("177.25")),
    "TSLA": ("Tesla Inc.", Decimal("248.75"), Decimal("250.10")),
    "NVDA": ("NVIDIA Corporation", Decimal("485.25"), Decimal("482.50")),
    "META": ("Meta Platforms Inc.", Decimal("505.50"), Decimal("502.75")),
    "SPY": ("SPDR S&P 500 ETF", Decimal("485.25"), Decimal("484.10")),
}


class StubQuoteStore:
    """
    In-memory quote store with deterministic prices.

    Prices can be overridden or removed at runtime to simulate feed updates
    and symbols dropping out of the feed.
    """

    def __init__(self, quotes: Optional[dict[str, Quote]] = None):
        if quotes is None:
            quotes = self._default_quotes()
        self._quotes = {symbol.upper(): quote for symbol, quote in quotes.items()}

    def current_quote(self, symbol: str) -> Optional[Quote]:
        """Return the stub quote for a symbol, or None if unknown."""
        return self._quotes.get(symbol.upper())

    def list_quotes(self) -> list[Quote]:
        """Return all stub quotes ordered by symbol."""
        return [self._quotes[symbol] for symbol in sorted(self._quotes)]

    def set_price(self, symbol: str, price: Decimal, name: Optional[str] = None) -> None:
        """Set (or add) the price for a symbol."""
        upper_symbol = symbol.upper()
        previous = self._quotes.get(upper_symbol)
        prev_price = previous.price if previous else price
        change = price - prev_price
        change_percent = (change / prev_price * 100) if prev_price else Decimal("0")
        self._quotes[upper_symbol] = Quote(
            symbol=upper_symbol,
            name=name or (previous.name if previous else None),
            price=price,
            change=change,
            change_percent=change_percent.quantize(Decimal("0.0001")),
            as_of=now_eastern(),
        )

    def remove(self, symbol: str) -> None:
        """Drop a symbol from the store."""
        self._quotes.pop(symbol.upper(), None)

    @staticmethod
    def _default_quotes() -> dict[str, Quote]:
        as_of = now_eastern()
        result: dict[str, Quote] = {}
        for symbol, (name, price, prev_close) in _STUB_QUOTES.items():
            change = price - prev_close
            result[symbol] = Quote(
                symbol=symbol,
                name=name,
                price=price,
                change=change,
                change_percent=(change / prev_close * 100).quantize(Decimal("0.0001")),
                as_of=as_of,
            )
        return result
