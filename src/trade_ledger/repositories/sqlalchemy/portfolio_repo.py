"""SQLAlchemy implementation of PortfolioRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from trade_ledger.core.timezone import to_eastern
from trade_ledger.domain.models import Portfolio
from trade_ledger.repositories.sqlalchemy.orm_models import PortfolioORM


class SqlAlchemyPortfolioRepository:
    """
    SQLAlchemy-backed portfolio repository.

    Flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self._db = db

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        orm_portfolio = PortfolioORM(
            account_id=portfolio.account_id,
            cash_balance=portfolio.cash_balance,
            total_value=portfolio.total_value,
            total_pnl=portfolio.total_pnl,
            created_at_est=portfolio.created_at_est,
            updated_at_est=portfolio.updated_at_est,
        )
        self._db.add(orm_portfolio)
        self._db.flush()
        return self._to_domain(orm_portfolio)

    def get(self, account_id: str, for_update: bool = False) -> Optional[Portfolio]:
        """Retrieve the portfolio for an account, optionally row-locked."""
        orm_portfolio = self._get_orm(account_id, for_update=for_update)
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    def update_cash(self, account_id: str, cash_balance: Decimal, updated_at: datetime) -> None:
        """Overwrite the cash balance."""
        orm_portfolio = self._require_orm(account_id)
        orm_portfolio.cash_balance = cash_balance
        orm_portfolio.updated_at_est = updated_at
        self._db.flush()

    def update_valuation(
        self,
        account_id: str,
        total_value: Decimal,
        total_pnl: Decimal,
        updated_at: datetime,
    ) -> None:
        """Overwrite total value and P&L after a revaluation."""
        orm_portfolio = self._require_orm(account_id)
        orm_portfolio.total_value = total_value
        orm_portfolio.total_pnl = total_pnl
        orm_portfolio.updated_at_est = updated_at
        self._db.flush()

    def _get_orm(self, account_id: str, for_update: bool = False) -> Optional[PortfolioORM]:
        query = self._db.query(PortfolioORM).filter(PortfolioORM.account_id == account_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def _require_orm(self, account_id: str) -> PortfolioORM:
        orm_portfolio = self._get_orm(account_id)
        if orm_portfolio is None:
            raise ValueError(f"Portfolio not found: {account_id}")
        return orm_portfolio

    @staticmethod
    def _to_domain(orm: PortfolioORM) -> Portfolio:
        """Convert ORM model to domain model."""
        return Portfolio(
            account_id=orm.account_id,
            cash_balance=Decimal(str(orm.cash_balance)),
            total_value=Decimal(str(orm.total_value)),
            total_pnl=Decimal(str(orm.total_pnl)) if orm.total_pnl is not None else Decimal("0"),
            created_at_est=to_eastern(orm.created_at_est) if orm.created_at_est else None,
            updated_at_est=to_eastern(orm.updated_at_est) if orm.updated_at_est else None,
        )
