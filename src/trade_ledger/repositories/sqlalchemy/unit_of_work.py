"""Transactional unit of work over the ledger repositories."""

from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from trade_ledger.repositories.protocols import (
    HistoryRepository,
    HoldingRepository,
    PortfolioRepository,
    TransactionRepository,
)
from trade_ledger.repositories.sqlalchemy.portfolio_repo import SqlAlchemyPortfolioRepository
from trade_ledger.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from trade_ledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from trade_ledger.repositories.sqlalchemy.history_repo import SqlAlchemyHistoryRepository


class SqlAlchemyUnitOfWork:
    """
    One store transaction shared by all ledger repositories.

    Usage:
        with SqlAlchemyUnitOfWork(session_factory) as uow:
            uow.portfolios.update_cash(...)
            uow.transactions.create(...)

    Leaving the block normally commits. Any exception rolls back every
    statement issued inside the block and is re-raised.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self._session.begin()
        self.portfolios: PortfolioRepository = SqlAlchemyPortfolioRepository(self._session)
        self.holdings: HoldingRepository = SqlAlchemyHoldingRepository(self._session)
        self.transactions: TransactionRepository = SqlAlchemyTransactionRepository(self._session)
        self.history: HistoryRepository = SqlAlchemyHistoryRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self._session.commit()
            else:
                self._session.rollback()
        finally:
            self._session.close()
            self._session = None
