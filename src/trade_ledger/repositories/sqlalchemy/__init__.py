"""SQLAlchemy repository implementations."""

from trade_ledger.repositories.sqlalchemy.database import (
    create_db_engine,
    create_session_factory,
    init_db,
    Base,
)
from trade_ledger.repositories.sqlalchemy.portfolio_repo import SqlAlchemyPortfolioRepository
from trade_ledger.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from trade_ledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from trade_ledger.repositories.sqlalchemy.history_repo import SqlAlchemyHistoryRepository
from trade_ledger.repositories.sqlalchemy.quote_repo import SqlAlchemyQuoteStore
from trade_ledger.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "Base",
    "SqlAlchemyPortfolioRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyHistoryRepository",
    "SqlAlchemyQuoteStore",
    "SqlAlchemyUnitOfWork",
]
