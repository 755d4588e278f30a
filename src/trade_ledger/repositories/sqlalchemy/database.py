"""Database engine and session factory construction."""

from typing import Any

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def create_db_engine(
    database_url: str,
    busy_timeout_seconds: float = 30.0,
    **engine_kwargs: Any,
) -> Engine:
    """
    Create the ledger store engine.

    SQLite has no row locks, so every SQLite transaction is opened with
    BEGIN IMMEDIATE: writers queue on the database lock (up to the busy
    timeout) instead of reading stale balances side by side.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False, **engine_kwargs)

    engine = create_engine(
        database_url,
        connect_args={
            "check_same_thread": False,  # SQLite-specific
            "timeout": busy_timeout_seconds,
        },
        echo=False,
        **engine_kwargs,
    )

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        # pysqlite would otherwise emit its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory handed to the ledger engine."""
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create ledger and quote tables if they don't exist."""
    from trade_ledger.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
