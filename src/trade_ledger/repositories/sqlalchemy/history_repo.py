"""SQLAlchemy implementation of HistoryRepository."""

from decimal import Decimal

from sqlalchemy.orm import Session

from trade_ledger.core.timezone import to_eastern
from trade_ledger.domain.models import PortfolioSnapshot
from trade_ledger.repositories.sqlalchemy.orm_models import PortfolioHistoryORM


class SqlAlchemyHistoryRepository:
    """SQLAlchemy-backed portfolio history repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
        """Append a snapshot."""
        orm_snapshot = PortfolioHistoryORM(
            account_id=snapshot.account_id,
            timestamp_est=snapshot.timestamp_est,
            total_value=snapshot.total_value,
            cash_balance=snapshot.cash_balance,
            holdings_value=snapshot.holdings_value,
            stale=snapshot.stale,
        )
        self._db.add(orm_snapshot)
        self._db.flush()
        return self._to_domain(orm_snapshot)

    def list_recent(self, account_id: str, limit: int) -> list[PortfolioSnapshot]:
        """List at most `limit` snapshots, newest first (by id, not wall-clock time)."""
        orm_snapshots = (
            self._db.query(PortfolioHistoryORM)
            .filter(PortfolioHistoryORM.account_id == account_id)
            .order_by(PortfolioHistoryORM.snapshot_id.desc())
            .limit(limit)
            .all()
        )
        return [self._to_domain(s) for s in orm_snapshots]

    @staticmethod
    def _to_domain(orm: PortfolioHistoryORM) -> PortfolioSnapshot:
        """Convert ORM model to domain model."""
        return PortfolioSnapshot(
            snapshot_id=orm.snapshot_id,
            account_id=orm.account_id,
            timestamp_est=to_eastern(orm.timestamp_est),
            total_value=Decimal(str(orm.total_value)),
            cash_balance=Decimal(str(orm.cash_balance)),
            holdings_value=Decimal(str(orm.holdings_value)),
            stale=bool(orm.stale),
        )
