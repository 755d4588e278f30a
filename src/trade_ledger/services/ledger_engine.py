"""Portfolio ledger engine: trade execution, holdings and valuation history."""

import logging
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Iterator, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from trade_ledger.core.timezone import now_eastern
from trade_ledger.core.exceptions import (
    InsufficientFundsError,
    InsufficientSharesError,
    StorageError,
    TradeRejectedError,
    ValidationError,
)
from trade_ledger.domain.models import (
    Holding,
    Portfolio,
    PortfolioSnapshot,
    TradeOutcome,
    TradeSide,
    Transaction,
)
from trade_ledger.domain.views import HistoryPoint, HoldingView, Revaluation, TradeResult
from trade_ledger.providers.quote_provider import QuoteStore
from trade_ledger.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = Decimal("10000")
DEFAULT_HISTORY_LIMIT = 365

EXECUTED_MESSAGE = "Trade executed successfully"
INVALID_MESSAGE = "Invalid trade request"

# Matches the NUMERIC(24, 8) ledger columns
LEDGER_SCALE = Decimal("0.00000001")
MAX_AMOUNT = Decimal("1e16")

Numeric = Union[Decimal, int, float, str]


class PortfolioLedgerEngine:
    """
    Engine owning every read and write of the portfolio ledger.

    The store is the only source of truth: nothing is cached between calls,
    and every operation opens its own session from the injected factory.
    execute_trade is the only operation that needs per-account serialization;
    it row-locks the portfolio before reading the balance it checks.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        quote_store: QuoteStore,
        starting_balance: Decimal = DEFAULT_STARTING_BALANCE,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._session_factory = session_factory
        self._quote_store = quote_store
        self._starting_balance = Decimal(starting_balance)
        self._history_limit = history_limit

    @property
    def starting_balance(self) -> Decimal:
        return self._starting_balance

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def get_portfolio(self, account_id: str) -> Portfolio:
        """
        Get the portfolio for an account, opening it on first access.

        A new portfolio starts with the starting balance as both cash and
        total value, and zero P&L.
        """
        with self._storage_errors("Portfolio lookup", account_id):
            try:
                with self._unit_of_work() as uow:
                    portfolio = uow.portfolios.get(account_id)
                    if portfolio is None:
                        portfolio = uow.portfolios.create(self._new_portfolio(account_id))
                        logger.info(
                            "Opened portfolio for account %s with %s cash",
                            account_id,
                            self._starting_balance,
                        )
                return portfolio
            except IntegrityError:
                # A concurrent first access inserted the row before us
                with self._unit_of_work() as uow:
                    return uow.portfolios.get(account_id)

    def get_holdings(self, account_id: str) -> list[HoldingView]:
        """
        Get open holdings valued at the current quote.

        A holding whose symbol has no quote is still returned, with no
        current price and a zero current value.
        """
        with self._storage_errors("Holdings lookup", account_id):
            with self._unit_of_work() as uow:
                holdings = uow.holdings.list_open(account_id)
            return [self._value_holding(h) for h in holdings]

    def get_transactions(self, account_id: str) -> list[Transaction]:
        """Get every executed trade for an account, newest first."""
        with self._storage_errors("Transaction lookup", account_id):
            with self._unit_of_work() as uow:
                return uow.transactions.list_by_account(account_id)

    def get_history(self, account_id: str) -> list[HistoryPoint]:
        """Get the most recent valuation snapshots, newest first."""
        with self._storage_errors("History lookup", account_id):
            with self._unit_of_work() as uow:
                snapshots = uow.history.list_recent(account_id, self._history_limit)
        return [
            HistoryPoint(
                date=s.timestamp_est.date(),
                total_value=s.total_value,
                cash_balance=s.cash_balance,
                holdings_value=s.holdings_value,
                stale=s.stale,
            )
            for s in snapshots
        ]

    # ------------------------------------------------------------------
    # Trade execution
    # ------------------------------------------------------------------

    def execute_trade(
        self,
        account_id: str,
        symbol: str,
        side: Union[TradeSide, str],
        quantity: Numeric,
        price: Numeric,
    ) -> TradeResult:
        """
        Execute a BUY or SELL as one atomic store transaction.

        Cash, holding and transaction log either all change or none do.
        Invalid requests and business rejections come back as unsuccessful
        TradeResults; store failures raise StorageError after rollback.
        """
        try:
            side, symbol, quantity, price = self._validate_trade(account_id, symbol, side, quantity, price)
        except ValidationError as exc:
            logger.warning("Invalid trade request for account %s: %s", account_id, exc.message)
            return TradeResult(success=False, message=INVALID_MESSAGE, outcome=TradeOutcome.INVALID)

        self.get_portfolio(account_id)
        cost = (quantity * price).quantize(LEDGER_SCALE)

        try:
            with self._storage_errors("Trade execution", account_id):
                with self._unit_of_work() as uow:
                    txn = Transaction(
                        account_id=account_id,
                        symbol=symbol,
                        side=side,
                        quantity=quantity,
                        price=price,
                        total=cost,
                        timestamp_est=now_eastern(),
                    )
                    if side == TradeSide.BUY:
                        self._apply_buy(uow, txn)
                    else:
                        self._apply_sell(uow, txn)
                    uow.transactions.create(txn)
        except TradeRejectedError as exc:
            logger.info("Trade rejected for account %s: %s", account_id, exc.message)
            return TradeResult(success=False, message=exc.reason, outcome=TradeOutcome.REJECTED)

        logger.info(
            "Executed %s %s %s @ %s for account %s",
            side.value,
            quantity,
            symbol,
            price,
            account_id,
        )
        return TradeResult(success=True, message=EXECUTED_MESSAGE, outcome=TradeOutcome.EXECUTED)

    def _apply_buy(self, uow: SqlAlchemyUnitOfWork, txn: Transaction) -> None:
        portfolio = self._lock_portfolio(uow, txn.account_id)
        if portfolio.cash_balance < txn.total:
            raise InsufficientFundsError(str(txn.total), str(portfolio.cash_balance))

        uow.portfolios.update_cash(
            txn.account_id, portfolio.cash_balance + txn.net_cash_impact, txn.timestamp_est
        )

        holding = uow.holdings.get(txn.account_id, txn.symbol, for_update=True)
        if holding is None:
            uow.holdings.create(
                Holding(
                    account_id=txn.account_id,
                    symbol=txn.symbol,
                    quantity=txn.quantity,
                    average_cost=txn.price,
                )
            )
            return

        new_quantity = holding.quantity + txn.quantity
        new_average_cost = (holding.cost_basis + txn.total) / new_quantity
        uow.holdings.update(
            Holding(
                account_id=txn.account_id,
                symbol=txn.symbol,
                quantity=new_quantity,
                average_cost=new_average_cost.quantize(LEDGER_SCALE),
            )
        )

    def _apply_sell(self, uow: SqlAlchemyUnitOfWork, txn: Transaction) -> None:
        # Portfolio lock first so every trade on the account takes locks in the same order
        portfolio = self._lock_portfolio(uow, txn.account_id)
        holding = uow.holdings.get(txn.account_id, txn.symbol, for_update=True)
        if holding is None or holding.quantity < txn.quantity:
            available = holding.quantity if holding else Decimal("0")
            raise InsufficientSharesError(txn.symbol, str(txn.quantity), str(available))

        uow.portfolios.update_cash(
            txn.account_id, portfolio.cash_balance + txn.net_cash_impact, txn.timestamp_est
        )

        remaining = holding.quantity - txn.quantity
        if remaining > 0:
            uow.holdings.update(
                Holding(
                    account_id=txn.account_id,
                    symbol=txn.symbol,
                    quantity=remaining,
                    average_cost=holding.average_cost,
                )
            )
        else:
            uow.holdings.delete(txn.account_id, txn.symbol)

    @staticmethod
    def _lock_portfolio(uow: SqlAlchemyUnitOfWork, account_id: str) -> Portfolio:
        portfolio = uow.portfolios.get(account_id, for_update=True)
        if portfolio is None:
            raise StorageError(f"Portfolio row missing for account {account_id}")
        return portfolio

    def _validate_trade(
        self,
        account_id: str,
        symbol: str,
        side: Union[TradeSide, str],
        quantity: Numeric,
        price: Numeric,
    ) -> tuple[TradeSide, str, Decimal, Decimal]:
        """Normalize trade input; raise ValidationError before any ledger access."""
        if not account_id:
            raise ValidationError("Account id is required")

        try:
            side = TradeSide(side.upper() if isinstance(side, str) else side)
        except ValueError:
            raise ValidationError(f"Unknown trade side: {side}")

        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required")

        quantity = self._to_decimal(quantity, "quantity")
        price = self._to_decimal(price, "price")
        if quantity <= 0:
            raise ValidationError(f"Quantity must be positive, got {quantity}")
        if price <= 0:
            raise ValidationError(f"Price must be positive, got {price}")
        self._check_ledger_scale(quantity, "quantity")
        self._check_ledger_scale(price, "price")
        if quantity * price >= MAX_AMOUNT:
            raise ValidationError(f"Trade value of {quantity} x {price} is out of range")
        if (quantity * price).quantize(LEDGER_SCALE) <= 0:
            raise ValidationError(f"Trade value of {quantity} x {price} rounds to zero")

        with self._storage_errors("Quote lookup", account_id):
            if self._quote_store.current_quote(symbol) is None:
                raise ValidationError(f"Unknown symbol: {symbol}")

        return side, symbol, quantity, price

    @staticmethod
    def _to_decimal(value: Numeric, field_name: str) -> Decimal:
        if isinstance(value, bool) or value is None:
            raise ValidationError(f"{field_name} must be a number")
        try:
            result = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} must be a number, got {value!r}")
        if not result.is_finite():
            raise ValidationError(f"{field_name} must be finite, got {value!r}")
        return result

    @staticmethod
    def _check_ledger_scale(value: Decimal, field_name: str) -> None:
        """Reject values the NUMERIC(24, 8) columns would round or overflow."""
        if value >= MAX_AMOUNT:
            raise ValidationError(f"{field_name} is out of range, got {value}")
        if value != value.quantize(LEDGER_SCALE):
            raise ValidationError(f"{field_name} has more than 8 decimal places, got {value}")

    # ------------------------------------------------------------------
    # Revaluation
    # ------------------------------------------------------------------

    def revalue_and_snapshot(self, account_id: str) -> Revaluation:
        """
        Recompute total value and P&L from current quotes and log a snapshot.

        Runs in its own transaction, separate from any trade. Holdings without
        a quote count as zero and mark the snapshot stale.
        """
        holdings = self.get_holdings(account_id)
        portfolio = self.get_portfolio(account_id)

        holdings_value = sum((h.current_value for h in holdings), Decimal("0"))
        stale_symbols = [h.symbol for h in holdings if not h.quote_available]
        total_value = portfolio.cash_balance + holdings_value
        total_pnl = total_value - self._starting_balance
        as_of = now_eastern()

        if stale_symbols:
            logger.warning(
                "Revaluing account %s without quotes for %s; valuation is stale",
                account_id,
                ", ".join(stale_symbols),
            )

        with self._storage_errors("Revaluation", account_id):
            with self._unit_of_work() as uow:
                uow.portfolios.update_valuation(account_id, total_value, total_pnl, as_of)
                uow.history.create(
                    PortfolioSnapshot(
                        account_id=account_id,
                        timestamp_est=as_of,
                        total_value=total_value,
                        cash_balance=portfolio.cash_balance,
                        holdings_value=holdings_value,
                        stale=bool(stale_symbols),
                    )
                )

        return Revaluation(
            account_id=account_id,
            total_value=total_value,
            cash_balance=portfolio.cash_balance,
            holdings_value=holdings_value,
            total_pnl=total_pnl,
            stale_symbols=stale_symbols,
            as_of=as_of,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._session_factory)

    @contextmanager
    def _storage_errors(self, action: str, account_id: str) -> Iterator[None]:
        """Translate store failures into StorageError."""
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("%s failed for account %s", action, account_id)
            raise StorageError(f"{action} failed") from exc

    def _new_portfolio(self, account_id: str) -> Portfolio:
        now = now_eastern()
        return Portfolio(
            account_id=account_id,
            cash_balance=self._starting_balance,
            total_value=self._starting_balance,
            total_pnl=Decimal("0"),
            created_at_est=now,
            updated_at_est=now,
        )

    def _value_holding(self, holding: Holding) -> HoldingView:
        quote = self._quote_store.current_quote(holding.symbol)
        if quote is None:
            return HoldingView(
                symbol=holding.symbol,
                quantity=holding.quantity,
                average_cost=holding.average_cost,
            )
        current_value = holding.quantity * quote.price
        return HoldingView(
            symbol=holding.symbol,
            quantity=holding.quantity,
            average_cost=holding.average_cost,
            name=quote.name,
            current_price=quote.price,
            current_value=current_value,
            unrealized_pnl=current_value - holding.cost_basis,
        )
