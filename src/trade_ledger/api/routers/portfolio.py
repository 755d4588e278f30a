"""Portfolio API: balances, holdings, trade log, valuation history and trading."""

from fastapi import APIRouter, Depends

from trade_ledger.api.deps import get_account_id, get_ledger_engine, get_trading_service
from trade_ledger.api.schemas.portfolio import (
    PortfolioResponse,
    HoldingResponse,
    TransactionResponse,
    HistoryPointResponse,
    TradeRequest,
    TradeResponse,
)
from trade_ledger.services import PortfolioLedgerEngine, TradingService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    account_id: str = Depends(get_account_id),
    engine: PortfolioLedgerEngine = Depends(get_ledger_engine),
):
    """Return the account's portfolio, opening it with the starting balance on first access."""
    return PortfolioResponse.model_validate(engine.get_portfolio(account_id))


@router.get("/holdings", response_model=list[HoldingResponse])
def get_holdings(
    account_id: str = Depends(get_account_id),
    engine: PortfolioLedgerEngine = Depends(get_ledger_engine),
):
    """Return open holdings valued at current quotes."""
    return [HoldingResponse.model_validate(h) for h in engine.get_holdings(account_id)]


@router.get("/transactions", response_model=list[TransactionResponse])
def get_transactions(
    account_id: str = Depends(get_account_id),
    engine: PortfolioLedgerEngine = Depends(get_ledger_engine),
):
    """Return executed trades, newest first."""
    return [TransactionResponse.model_validate(t) for t in engine.get_transactions(account_id)]


@router.get("/history", response_model=list[HistoryPointResponse])
def get_history(
    account_id: str = Depends(get_account_id),
    engine: PortfolioLedgerEngine = Depends(get_ledger_engine),
):
    """Return valuation snapshots, newest first."""
    return [HistoryPointResponse.model_validate(p) for p in engine.get_history(account_id)]


@router.post("/trade", response_model=TradeResponse)
def execute_trade(
    data: TradeRequest,
    account_id: str = Depends(get_account_id),
    trading_service: TradingService = Depends(get_trading_service),
):
    """
    Execute a trade and revalue the portfolio.

    Rejections (insufficient funds or shares) return 200 with success=false.
    Store failures surface as 503 through the StorageError handler.
    """
    result = trading_service.place_trade(
        account_id=account_id,
        symbol=data.symbol,
        side=data.type,
        quantity=data.quantity,
        price=data.price,
    )
    return TradeResponse(success=result.success, message=result.message)
