"""SQLAlchemy-backed quote store over the shared `stocks` table."""

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from trade_ledger.core.exceptions import StorageError
from trade_ledger.core.timezone import now_eastern, to_eastern
from trade_ledger.domain.views import Quote
from trade_ledger.repositories.sqlalchemy.orm_models import QuoteORM

logger = logging.getLogger(__name__)


class SqlAlchemyQuoteStore:
    """
    Quote store reading the latest price per symbol from the database.

    The external price feed writes through upsert_quote; the ledger engine
    only reads. Each call uses its own short session, and store failures
    surface as StorageError.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def current_quote(self, symbol: str) -> Optional[Quote]:
        """Return the latest quote for a symbol, or None if unknown."""
        with self._storage_errors("Quote lookup"):
            with self._session_factory() as db:
                orm_quote = db.query(QuoteORM).filter(QuoteORM.symbol == symbol.upper()).first()
                return self._to_domain(orm_quote) if orm_quote else None

    def list_quotes(self) -> list[Quote]:
        """Return all known quotes ordered by symbol."""
        with self._storage_errors("Quote listing"):
            with self._session_factory() as db:
                orm_quotes = db.query(QuoteORM).order_by(QuoteORM.symbol).all()
                return [self._to_domain(q) for q in orm_quotes]

    def upsert_quote(self, quote: Quote) -> Quote:
        """Insert or replace the latest quote for a symbol."""
        symbol = quote.symbol.upper()
        with self._storage_errors("Quote upsert"):
            with self._session_factory.begin() as db:
                orm_quote = db.query(QuoteORM).filter(QuoteORM.symbol == symbol).first()
                if orm_quote is None:
                    orm_quote = QuoteORM(symbol=symbol)
                    db.add(orm_quote)
                if quote.name is not None:
                    orm_quote.name = quote.name
                orm_quote.price = quote.price
                orm_quote.change = quote.change
                orm_quote.change_percent = quote.change_percent
                orm_quote.last_updated_est = quote.as_of or now_eastern()
                db.flush()
                return self._to_domain(orm_quote)

    @staticmethod
    @contextmanager
    def _storage_errors(action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("%s failed", action)
            raise StorageError(f"{action} failed") from exc

    @staticmethod
    def _to_domain(orm: QuoteORM) -> Quote:
        """Convert ORM model to domain model."""
        return Quote(
            symbol=orm.symbol,
            name=orm.name,
            price=Decimal(str(orm.price)),
            change=Decimal(str(orm.change)) if orm.change is not None else Decimal("0"),
            change_percent=(
                Decimal(str(orm.change_percent)) if orm.change_percent is not None else Decimal("0")
            ),
            as_of=to_eastern(orm.last_updated_est) if orm.last_updated_est else None,
        )
