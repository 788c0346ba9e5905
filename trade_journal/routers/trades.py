"""Router for recording, closing and reviewing trades."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from trade_journal.calculations import NotComputable, Rejected, exit_scenarios
from trade_journal.database import get_db
from trade_journal.exceptions import NotFoundError
from trade_journal.routers.deps import get_current_user_id
from trade_journal.schemas.trade import (
    PnlPoint,
    PnlPreviewRead,
    PnlPreviewRequest,
    ScenarioRead,
    TradeClose,
    TradeCreate,
    TradeRead,
    TradeStatsRead,
    TradeUpdate,
)
from trade_journal.services import trade_service
from trade_journal.utils.query_params import parse_closed_param

router = APIRouter()


def _unwrap(result):
    """Turn a Rejected lifecycle result into a 422 carrying its reason."""
    if isinstance(result, Rejected):
        raise HTTPException(status_code=422, detail=result.reason)
    return result


def _scenario(result) -> ScenarioRead:
    if isinstance(result, NotComputable):
        return ScenarioRead(detail=result.reason)
    return ScenarioRead(pnl=result.pnl, pnl_percent=result.pnl_percent)


@router.get("/", response_model=list[TradeRead])
def list_trades(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    status_filter: str | None = Query(None, alias="status"),
):
    """List the caller's trades, newest first. status=open|closed filters."""
    return trade_service.list_trades(
        db, user_id, is_closed=parse_closed_param(status_filter)
    )


@router.post("/", response_model=TradeRead, status_code=status.HTTP_201_CREATED)
def create_trade(
    payload: TradeCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Open a new trade."""
    return _unwrap(trade_service.open_trade(db, user_id, **payload.model_dump()))


@router.post("/preview", response_model=PnlPreviewRead)
def preview_pnl(payload: PnlPreviewRequest):
    """PnL the trade would realize at its stop loss and take profit."""
    scenarios = exit_scenarios(
        payload.mode,
        payload.direction,
        payload.entry_price,
        payload.margin,
        payload.leverage,
        payload.stop_loss,
        payload.take_profit,
    )
    return PnlPreviewRead(
        stop_loss=_scenario(scenarios.stop_loss),
        take_profit=_scenario(scenarios.take_profit),
    )


@router.get("/stats", response_model=TradeStatsRead)
def trade_stats(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Performance overview for closed trades."""
    return trade_service.get_stats(db, user_id)


@router.get("/pnl-history", response_model=list[PnlPoint])
def pnl_history(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Cumulative realized PnL by close date."""
    return trade_service.get_pnl_over_time(db, user_id)


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(
    trade_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    trade = trade_service.get_trade(db, user_id, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade


@router.patch("/{trade_id}", response_model=TradeRead)
def edit_trade(
    trade_id: str,
    payload: TradeUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Edit trade fields. Closed trades get their PnL recomputed."""
    try:
        result = trade_service.edit_trade(
            db, user_id, trade_id, payload.model_dump(exclude_unset=True)
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Trade not found")
    return _unwrap(result)


@router.post("/{trade_id}/close", response_model=TradeRead)
def close_trade(
    trade_id: str,
    payload: TradeClose,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Close early at a given price, or mark stop loss / take profit hit."""
    try:
        result = trade_service.close_trade(
            db, user_id, trade_id, payload.reason, payload.close_price
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Trade not found")
    return _unwrap(result)


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trade(
    trade_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    if not trade_service.delete_trade(db, user_id, trade_id):
        raise HTTPException(status_code=404, detail="Trade not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
