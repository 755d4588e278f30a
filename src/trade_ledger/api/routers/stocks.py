"""Quote lookup API."""

from fastapi import APIRouter, Depends

from trade_ledger.api.deps import get_quote_store
from trade_ledger.api.schemas.stock import QuoteResponse
from trade_ledger.core.exceptions import NotFoundError
from trade_ledger.providers.quote_provider import QuoteStore

router = APIRouter(prefix="/stocks", tags=["stocks"])


@router.get("", response_model=list[QuoteResponse])
def list_stocks(quote_store: QuoteStore = Depends(get_quote_store)):
    """Return every known quote, ordered by symbol."""
    return [QuoteResponse.model_validate(q) for q in quote_store.list_quotes()]


@router.get("/{symbol}", response_model=QuoteResponse)
def get_stock(symbol: str, quote_store: QuoteStore = Depends(get_quote_store)):
    """Return the latest quote for a symbol."""
    quote = quote_store.current_quote(symbol.upper())
    if quote is None:
        raise NotFoundError("Stock", symbol.upper())
    return QuoteResponse.model_validate(quote)
