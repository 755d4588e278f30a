"""API routers package."""

from trade_ledger.api.routers.portfolio import router as portfolio_router
from trade_ledger.api.routers.stocks import router as stocks_router

__all__ = [
    "portfolio_router",
    "stocks_router",
]
