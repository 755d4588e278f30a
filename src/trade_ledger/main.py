"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

from trade_ledger.config.settings import Settings, get_settings
from trade_ledger.config.logging_config import setup_logging
from trade_ledger.repositories.sqlalchemy import (
    SqlAlchemyQuoteStore,
    create_db_engine,
    create_session_factory,
    init_db,
)
from trade_ledger.api.routers import portfolio_router, stocks_router
from trade_ledger.core.exceptions import AppError, NotFoundError, StorageError
from trade_ledger.providers.quote_provider import QuoteStore
from trade_ledger.services import PortfolioLedgerEngine


def create_app(
    settings: Optional[Settings] = None,
    db_engine: Optional[Engine] = None,
    quote_store: Optional[QuoteStore] = None,
) -> FastAPI:
    """
    Build the API around an explicitly constructed ledger engine.

    Args:
        settings: Settings to use; defaults to the global settings.
        db_engine: Store engine; built from settings.database_url if omitted.
        quote_store: Quote source; defaults to the `stocks` table in the same store.
    """
    settings = settings or get_settings()
    owns_engine = db_engine is None
    if db_engine is None:
        db_engine = create_db_engine(
            settings.database_url,
            busy_timeout_seconds=settings.sqlite_busy_timeout_seconds,
        )
    session_factory = create_session_factory(db_engine)
    if quote_store is None:
        quote_store = SqlAlchemyQuoteStore(session_factory)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        setup_logging(settings)
        init_db(db_engine)
        yield
        if owns_engine:
            db_engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Trade execution and portfolio ledger",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.quote_store = quote_store
    app.state.ledger_engine = PortfolioLedgerEngine(
        session_factory=session_factory,
        quote_store=quote_store,
        starting_balance=settings.starting_cash_balance,
        history_limit=settings.history_limit,
    )

    app.include_router(portfolio_router)
    app.include_router(stocks_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=400,
            content={"error": exc.code, "message": exc.message},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": exc.code, "message": exc.message},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        """Store faults are server-side failures, never business rejections."""
        return JSONResponse(
            status_code=503,
            content={"success": False, "message": exc.message},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
