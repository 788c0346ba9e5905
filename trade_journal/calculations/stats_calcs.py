"""Pure calculation functions for closed-trade performance statistics."""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from trade_journal.calculations.types import TradeSnapshot, TradeStatus


@dataclass(frozen=True, slots=True)
class TradeStats:
    """Summary statistics for a set of closed trades."""

    total_trades: int = 0
    win_rate: float = 0.0  # 0 to 100
    total_pnl: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    winning_trades: int = 0
    losing_trades: int = 0


def split_by_status(
    trades: Iterable[TradeSnapshot],
) -> tuple[list[TradeSnapshot], list[TradeSnapshot]]:
    """Split trades into (open, closed), preserving order."""
    open_trades = []
    closed_trades = []
    for trade in trades:
        if TradeStatus(trade.status).is_closed:
            closed_trades.append(trade)
        else:
            open_trades.append(trade)
    return open_trades, closed_trades


def summarize(closed_trades: Iterable[TradeSnapshot]) -> TradeStats:
    """
    Reduce closed trades to summary statistics.

    Winners have pnl > 0, losers pnl < 0; break-even trades count toward
    neither but still count toward total_trades. Averages over an empty
    group are 0.
    """
    pnls = [trade.pnl or 0.0 for trade in closed_trades]
    if not pnls:
        return TradeStats()

    wins = [pnl for pnl in pnls if pnl > 0]
    losses = [pnl for pnl in pnls if pnl < 0]

    return TradeStats(
        total_trades=len(pnls),
        win_rate=len(wins) / len(pnls) * 100,
        total_pnl=sum(pnls),
        average_win=sum(wins) / len(wins) if wins else 0.0,
        average_loss=sum(losses) / len(losses) if losses else 0.0,
        winning_trades=len(wins),
        losing_trades=len(losses),
    )


def pnl_over_time(closed_trades: Iterable[TradeSnapshot]) -> list[dict]:
    """
    Calculate cumulative PnL over time from closed trades.

    Returns list of dicts with 'date' and 'cumulative_pnl' keys,
    sorted chronologically. Same-day closes are aggregated.
    """
    daily_pnl: dict[date, float] = defaultdict(float)

    for trade in closed_trades:
        if trade.closed_at is None:
            continue
        daily_pnl[trade.closed_at.date()] += trade.pnl or 0.0

    result = []
    cumulative = 0.0
    for day in sorted(daily_pnl):
        cumulative += daily_pnl[day]
        result.append({"date": day, "cumulative_pnl": cumulative})

    return result
