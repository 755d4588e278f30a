"""Trade placement: execution followed by a best-effort revaluation."""

import logging
from decimal import Decimal
from typing import Optional, Union

from trade_ledger.core.exceptions import StorageError
from trade_ledger.domain.models import TradeSide
from trade_ledger.domain.views import Revaluation, TradeResult
from trade_ledger.services.ledger_engine import PortfolioLedgerEngine

logger = logging.getLogger(__name__)


class TradingService:
    """
    Caller-side orchestration of a trade.

    The trade commits first. Revaluation then runs as its own step: if it
    fails, the committed trade stands and the stored valuation stays stale
    until the next successful revaluation.
    """

    def __init__(self, engine: PortfolioLedgerEngine):
        self._engine = engine

    def place_trade(
        self,
        account_id: str,
        symbol: str,
        side: Union[TradeSide, str],
        quantity: Union[Decimal, int, float, str],
        price: Union[Decimal, int, float, str],
    ) -> TradeResult:
        """
        Execute a trade and, if it succeeded, revalue the portfolio.

        StorageError from the trade itself propagates; StorageError from the
        follow-up revaluation is logged and swallowed.
        """
        result = self._engine.execute_trade(account_id, symbol, side, quantity, price)
        if result.success:
            self.refresh_valuation(account_id)
        return result

    def refresh_valuation(self, account_id: str) -> Optional[Revaluation]:
        """Revalue the portfolio; return None if the store failed."""
        try:
            return self._engine.revalue_and_snapshot(account_id)
        except StorageError:
            logger.exception(
                "Revaluation after trade failed for account %s; valuation left stale",
                account_id,
            )
            return None
