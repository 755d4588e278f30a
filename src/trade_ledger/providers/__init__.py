"""Quote store providers."""

from trade_ledger.providers.quote_provider import QuoteStore
from trade_ledger.providers.stub_provider import StubQuoteStore

__all__ = [
    "QuoteStore",
    "StubQuoteStore",
]
