"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal

from sqlalchemy.orm import Session

from trade_ledger.core.timezone import to_eastern
from trade_ledger.domain.models import Transaction
from trade_ledger.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Append a transaction."""
        orm_txn = TransactionORM(
            account_id=transaction.account_id,
            symbol=transaction.symbol,
            side=transaction.side,
            quantity=transaction.quantity,
            price=transaction.price,
            total=transaction.total,
            timestamp_est=transaction.timestamp_est,
        )
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def list_by_account(self, account_id: str) -> list[Transaction]:
        """
        List all transactions for an account, newest first.

        Ordered by id: stored Eastern wall-clock times repeat during the
        DST fall-back hour, ids never do.
        """
        orm_txns = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.account_id == account_id)
            .order_by(TransactionORM.txn_id.desc())
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            account_id=orm.account_id,
            symbol=orm.symbol,
            side=orm.side,
            quantity=Decimal(str(orm.quantity)),
            price=Decimal(str(orm.price)),
            total=Decimal(str(orm.total)),
            timestamp_est=to_eastern(orm.timestamp_est),
        )
