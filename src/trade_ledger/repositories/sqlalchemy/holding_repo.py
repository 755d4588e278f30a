"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from trade_ledger.domain.models import Holding
from trade_ledger.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, account_id: str, symbol: str, for_update: bool = False) -> Optional[Holding]:
        """Get the holding for one symbol, optionally row-locked."""
        orm_holding = self._get_orm(account_id, symbol, for_update=for_update)
        return self._to_domain(orm_holding) if orm_holding else None

    def list_open(self, account_id: str) -> list[Holding]:
        """List holdings with quantity > 0, ordered by symbol."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.account_id == account_id, HoldingORM.quantity > 0)
            .order_by(HoldingORM.symbol)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def create(self, holding: Holding) -> Holding:
        """Insert a new holding."""
        orm_holding = HoldingORM(
            account_id=holding.account_id,
            symbol=holding.symbol,
            quantity=holding.quantity,
            average_cost=holding.average_cost,
        )
        self._db.add(orm_holding)
        self._db.flush()
        return self._to_domain(orm_holding)

    def update(self, holding: Holding) -> Holding:
        """Update quantity and average cost of an existing holding."""
        orm_holding = self._get_orm(holding.account_id, holding.symbol)
        if orm_holding is None:
            raise ValueError(f"Holding not found: {holding.account_id}/{holding.symbol}")
        orm_holding.quantity = holding.quantity
        orm_holding.average_cost = holding.average_cost
        self._db.flush()
        return self._to_domain(orm_holding)

    def delete(self, account_id: str, symbol: str) -> None:
        """Delete a closed holding."""
        self._db.query(HoldingORM).filter(
            HoldingORM.account_id == account_id,
            HoldingORM.symbol == symbol,
        ).delete()
        self._db.flush()

    def _get_orm(self, account_id: str, symbol: str, for_update: bool = False) -> Optional[HoldingORM]:
        query = self._db.query(HoldingORM).filter(
            HoldingORM.account_id == account_id,
            HoldingORM.symbol == symbol,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            account_id=orm.account_id,
            symbol=orm.symbol,
            quantity=Decimal(str(orm.quantity)),
            average_cost=Decimal(str(orm.average_cost)),
        )
