"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Enum as SqlEnum,
)

from trade_ledger.repositories.sqlalchemy.database import Base
from trade_ledger.domain.models.enums import TradeSide


class PortfolioORM(Base):
    """SQLAlchemy model for Portfolio (one row per account)."""

    __tablename__ = "portfolios"

    account_id = Column(String(64), primary_key=True)
    cash_balance = Column(Numeric(precision=24, scale=8), nullable=False)
    total_value = Column(Numeric(precision=24, scale=8), nullable=False)
    total_pnl = Column(Numeric(precision=24, scale=8), nullable=False, default=Decimal("0"))
    created_at_est = Column(DateTime(timezone=True), nullable=False)
    updated_at_est = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("cash_balance >= 0", name="check_cash_non_negative"),
    )


class HoldingORM(Base):
    """SQLAlchemy model for Holding (open position per account/symbol)."""

    __tablename__ = "holdings"

    account_id = Column(String(64), ForeignKey("portfolios.account_id"), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    quantity = Column(Numeric(precision=24, scale=8), nullable=False)
    average_cost = Column(Numeric(precision=24, scale=8), nullable=False)

    # A closed position is deleted, never kept at zero
    __table_args__ = (
        CheckConstraint("quantity > 0", name="check_quantity_positive"),
    )


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only trade log)."""

    __tablename__ = "transactions"

    txn_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(64), ForeignKey("portfolios.account_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    side = Column(SqlEnum(TradeSide), nullable=False)
    quantity = Column(Numeric(precision=24, scale=8), nullable=False)
    price = Column(Numeric(precision=24, scale=8), nullable=False)
    total = Column(Numeric(precision=24, scale=8), nullable=False)
    timestamp_est = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_transactions_account_time", "account_id", "timestamp_est"),
    )


class PortfolioHistoryORM(Base):
    """SQLAlchemy model for PortfolioHistory (append-only valuation log)."""

    __tablename__ = "portfolio_history"

    snapshot_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(64), ForeignKey("portfolios.account_id"), nullable=False)
    timestamp_est = Column(DateTime(timezone=True), nullable=False)
    total_value = Column(Numeric(precision=24, scale=8), nullable=False)
    cash_balance = Column(Numeric(precision=24, scale=8), nullable=False)
    holdings_value = Column(Numeric(precision=24, scale=8), nullable=False)
    stale = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_portfolio_history_account_time", "account_id", "timestamp_est"),
    )


class QuoteORM(Base):
    """SQLAlchemy model for the latest quote per symbol (written by the price feed)."""

    __tablename__ = "stocks"

    symbol = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=True)
    price = Column(Numeric(precision=24, scale=8), nullable=False)
    change = Column(Numeric(precision=24, scale=8), default=Decimal("0"))
    change_percent = Column(Numeric(precision=12, scale=4), default=Decimal("0"))
    last_updated_est = Column(DateTime(timezone=True), nullable=True)
