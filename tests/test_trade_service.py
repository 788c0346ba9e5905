"""Tests for trade service (storage and lifecycle orchestration)."""

from datetime import datetime, timedelta, timezone

import pytest

from trade_journal.calculations import Rejected, TradeStatus
from trade_journal.exceptions import NotFoundError
from trade_journal.models import Trade
from trade_journal.services import trade_service

USER = "user-1"
OTHER_USER = "user-2"


def open_spot(db_session, owner_id=USER, **overrides) -> Trade:
    fields = {
        "mode": "SPOT",
        "pair": "btcusdt",
        "entry_price": 100,
        "margin": 1000,
        "stop_loss": 90,
        "take_profit": 120,
    }
    fields.update(overrides)
    return trade_service.open_trade(db_session, owner_id, **fields)


def test_open_trade_persists(db_session):
    """Opening stores a normalized OPEN trade."""
    trade = open_spot(db_session)
    assert isinstance(trade, Trade)

    stored = db_session.query(Trade).filter(Trade.id == trade.id).first()
    assert stored.user_id == USER
    assert stored.pair == "BTCUSDT"
    assert stored.mode == "SPOT"
    assert stored.status == "OPEN"
    assert stored.direction is None
    assert stored.leverage is None
    assert stored.created_at is not None


def test_open_futures_defaults_leverage(db_session):
    trade = trade_service.open_trade(
        db_session, USER, mode="FUTURES", pair="ETH", entry_price=50, margin=200,
        direction="SHORT",
    )
    assert trade.direction == "SHORT"
    assert trade.leverage == 1


def test_open_trade_rejected_stores_nothing(db_session):
    result = trade_service.open_trade(
        db_session, USER, mode="FUTURES", pair="ETH", entry_price=50, margin=200
    )
    assert isinstance(result, Rejected)
    assert db_session.query(Trade).count() == 0


def test_list_trades_newest_first_and_scoped(db_session):
    first = open_spot(db_session, pair="AAA")
    second = open_spot(db_session, pair="BBB")
    open_spot(db_session, owner_id=OTHER_USER, pair="CCC")

    # Make ordering deterministic regardless of clock resolution
    first.created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    second.created_at = first.created_at + timedelta(days=1)
    db_session.commit()

    trades = trade_service.list_trades(db_session, USER)
    assert [t.pair for t in trades] == ["BBB", "AAA"]


def test_list_trades_filters_by_status(db_session):
    open_spot(db_session, pair="OPEN1")
    closing = open_spot(db_session, pair="DONE1")
    trade_service.close_trade(db_session, USER, closing.id, TradeStatus.STOP_LOSS)

    open_only = trade_service.list_trades(db_session, USER, is_closed=False)
    closed_only = trade_service.list_trades(db_session, USER, is_closed=True)
    assert [t.pair for t in open_only] == ["OPEN1"]
    assert [t.pair for t in closed_only] == ["DONE1"]


def test_get_trade_scoped_to_owner(db_session):
    trade = open_spot(db_session)
    assert trade_service.get_trade(db_session, USER, trade.id) is not None
    assert trade_service.get_trade(db_session, OTHER_USER, trade.id) is None


def test_close_trade_stores_pnl(db_session):
    trade = open_spot(db_session)

    closed = trade_service.close_trade(
        db_session, USER, trade.id, TradeStatus.CLOSED_EARLY, 110
    )
    assert closed.status == "CLOSED_EARLY"
    assert closed.close_price == 110
    assert closed.pnl == pytest.approx(100)
    assert closed.pnl_percent == pytest.approx(10)
    assert closed.closed_at is not None


def test_close_trade_rejection_leaves_row_unchanged(db_session):
    trade = open_spot(db_session, stop_loss=None)

    result = trade_service.close_trade(db_session, USER, trade.id, TradeStatus.STOP_LOSS)
    assert result == Rejected("No stop loss set on this trade.")

    db_session.refresh(trade)
    assert trade.status == "OPEN"
    assert trade.close_price is None
    assert trade.pnl is None
    assert trade.closed_at is None


def test_close_twice_rejected(db_session):
    trade = open_spot(db_session)
    trade_service.close_trade(db_session, USER, trade.id, TradeStatus.STOP_LOSS)

    result = trade_service.close_trade(
        db_session, USER, trade.id, TradeStatus.TAKE_PROFIT
    )
    assert isinstance(result, Rejected)

    db_session.refresh(trade)
    assert trade.status == "STOP_LOSS"
    assert trade.close_price == 90


def test_close_missing_trade_raises(db_session):
    with pytest.raises(NotFoundError):
        trade_service.close_trade(db_session, USER, "nope", TradeStatus.STOP_LOSS)


def test_close_other_users_trade_raises(db_session):
    trade = open_spot(db_session)
    with pytest.raises(NotFoundError):
        trade_service.close_trade(db_session, OTHER_USER, trade.id, "STOP_LOSS")


def test_edit_open_trade(db_session):
    trade = open_spot(db_session)

    edited = trade_service.edit_trade(
        db_session, USER, trade.id, {"take_profit": None, "margin": 500}
    )
    assert edited.take_profit is None
    assert edited.margin == 500
    assert edited.status == "OPEN"


def test_edit_closed_trade_recomputes_pnl(db_session):
    trade = open_spot(db_session)
    trade_service.close_trade(db_session, USER, trade.id, "CLOSED_EARLY", 110)

    edited = trade_service.edit_trade(db_session, USER, trade.id, {"close_price": 80})
    assert edited.close_price == 80
    assert edited.pnl == pytest.approx(-200)
    assert edited.pnl_percent == pytest.approx(-20)


def test_edit_rejection_leaves_row_unchanged(db_session):
    trade = open_spot(db_session)

    result = trade_service.edit_trade(db_session, USER, trade.id, {"leverage": 5})
    assert isinstance(result, Rejected)

    db_session.refresh(trade)
    assert trade.leverage is None


def test_update_trade_clears_columns(db_session):
    trade = open_spot(db_session)

    updated = trade_service.update_trade(db_session, trade.id, {"stop_loss": None})
    assert updated.stop_loss is None


def test_update_missing_trade_returns_none(db_session):
    assert trade_service.update_trade(db_session, "missing", {"pnl": 1}) is None


def test_delete_trade(db_session):
    trade = open_spot(db_session)

    assert trade_service.delete_trade(db_session, OTHER_USER, trade.id) is False
    assert trade_service.delete_trade(db_session, USER, trade.id) is True
    assert trade_service.get_trade(db_session, USER, trade.id) is None


def test_get_stats_over_closed_trades(db_session):
    winner = open_spot(db_session)
    loser = open_spot(db_session)
    even = open_spot(db_session)
    open_spot(db_session)  # stays open, excluded
    trade_service.close_trade(db_session, USER, winner.id, "CLOSED_EARLY", 110)
    trade_service.close_trade(db_session, USER, loser.id, "CLOSED_EARLY", 95)
    trade_service.close_trade(db_session, USER, even.id, "CLOSED_EARLY", 100)

    stats = trade_service.get_stats(db_session, USER)
    assert stats.total_trades == 3
    assert stats.win_rate == pytest.approx(100 / 3)
    assert stats.total_pnl == pytest.approx(50)
    assert stats.average_win == pytest.approx(100)
    assert stats.average_loss == pytest.approx(-50)


def test_get_stats_empty(db_session):
    open_spot(db_session)
    stats = trade_service.get_stats(db_session, USER)
    assert stats.total_trades == 0
    assert stats.win_rate == 0


def test_get_pnl_over_time(db_session):
    first = open_spot(db_session)
    second = open_spot(db_session)
    trade_service.close_trade(db_session, USER, first.id, "CLOSED_EARLY", 110)
    trade_service.close_trade(db_session, USER, second.id, "TAKE_PROFIT")

    series = trade_service.get_pnl_over_time(db_session, USER)
    assert series[-1]["cumulative_pnl"] == pytest.approx(300)
