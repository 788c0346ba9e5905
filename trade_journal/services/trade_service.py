"""Service for storing trades and running them through the lifecycle."""

import logging
from collections.abc import Mapping

from sqlalchemy import desc
from sqlalchemy.orm import Session

from trade_journal.calculations import (
    Rejected,
    TradeSnapshot,
    TradeStats,
    TradeStatus,
    lifecycle,
    pnl_over_time,
    split_by_status,
    summarize,
)
from trade_journal.exceptions import NotFoundError
from trade_journal.models import Trade
from trade_journal.models.trade import snapshot_columns

logger = logging.getLogger(__name__)


# --- Storage ---


def list_trades(
    db: Session, owner_id: str, is_closed: bool | None = None
) -> list[Trade]:
    """Get an owner's trades, newest first. Optionally only open or closed."""
    query = db.query(Trade).filter(Trade.user_id == owner_id)
    if is_closed is True:
        query = query.filter(Trade.status != TradeStatus.OPEN.value)
    elif is_closed is False:
        query = query.filter(Trade.status == TradeStatus.OPEN.value)
    return query.order_by(desc(Trade.created_at)).all()


def get_trade(db: Session, owner_id: str, trade_id: str) -> Trade | None:
    """Get a single trade by ID, scoped to its owner."""
    return (
        db.query(Trade)
        .filter(Trade.id == trade_id, Trade.user_id == owner_id)
        .first()
    )


def insert_trade(db: Session, snapshot: TradeSnapshot) -> Trade:
    """Persist a new trade."""
    trade = Trade.from_snapshot(snapshot)
    db.add(trade)
    db.commit()
    db.refresh(trade)
    return trade


def update_trade(db: Session, trade_id: str, fields: Mapping[str, object]) -> Trade | None:
    """Write fields to a stored trade in one commit. None values clear columns."""
    trade = db.query(Trade).filter(Trade.id == trade_id).first()
    if not trade:
        return None
    for key, value in fields.items():
        setattr(trade, key, value)
    db.commit()
    db.refresh(trade)
    return trade


def delete_trade(db: Session, owner_id: str, trade_id: str) -> bool:
    """Delete a trade. Returns True if deleted, False if not found."""
    trade = get_trade(db, owner_id, trade_id)
    if not trade:
        return False
    db.delete(trade)
    db.commit()
    logger.info("Deleted trade %s", trade_id)
    return True


# --- Lifecycle ---


def _require_trade(db: Session, owner_id: str, trade_id: str) -> Trade:
    trade = get_trade(db, owner_id, trade_id)
    if not trade:
        raise NotFoundError("Trade", trade_id)
    return trade


def open_trade(db: Session, owner_id: str, **fields) -> Trade | Rejected:
    """Validate and store a new OPEN trade."""
    snapshot = lifecycle.open_trade(owner_id, **fields)
    if isinstance(snapshot, Rejected):
        logger.warning("Rejected new trade for %s: %s", owner_id, snapshot.reason)
        return snapshot

    trade = insert_trade(db, snapshot)
    logger.info("Opened %s %s trade %s", trade.mode, trade.pair, trade.id)
    return trade


def close_trade(
    db: Session,
    owner_id: str,
    trade_id: str,
    reason: TradeStatus | str,
    close_price: float | None = None,
) -> Trade | Rejected:
    """
    Close a trade and store its PnL.

    Raises NotFoundError if the owner has no such trade. A Rejected result
    leaves the stored trade untouched.
    """
    trade = _require_trade(db, owner_id, trade_id)
    closed = lifecycle.close_trade(trade.to_snapshot(), reason, close_price)
    if isinstance(closed, Rejected):
        logger.warning("Rejected close of trade %s: %s", trade_id, closed.reason)
        return closed

    updated = update_trade(db, trade_id, snapshot_columns(closed))
    logger.info(
        "Closed trade %s as %s at %s (pnl %s)",
        trade_id,
        closed.status.value,
        closed.close_price,
        closed.pnl,
    )
    return updated


def edit_trade(
    db: Session, owner_id: str, trade_id: str, changes: Mapping[str, object]
) -> Trade | Rejected:
    """
    Edit trade fields, recomputing PnL when the trade is closed.

    Raises NotFoundError if the owner has no such trade.
    """
    trade = _require_trade(db, owner_id, trade_id)
    edited = lifecycle.edit_trade(trade.to_snapshot(), changes)
    if isinstance(edited, Rejected):
        logger.warning("Rejected edit of trade %s: %s", trade_id, edited.reason)
        return edited

    return update_trade(db, trade_id, snapshot_columns(edited))


# --- Statistics ---


def _closed_snapshots(db: Session, owner_id: str) -> list[TradeSnapshot]:
    _, closed = split_by_status(
        trade.to_snapshot() for trade in list_trades(db, owner_id)
    )
    return closed


def get_stats(db: Session, owner_id: str) -> TradeStats:
    """Summary statistics over the owner's closed trades."""
    return summarize(_closed_snapshots(db, owner_id))


def get_pnl_over_time(db: Session, owner_id: str) -> list[dict]:
    """Cumulative realized PnL by close date."""
    return pnl_over_time(_closed_snapshots(db, owner_id))
