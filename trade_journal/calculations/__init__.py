"""Calculation modules for trade PnL, lifecycle and statistics."""

from trade_journal.calculations.lifecycle import close_trade, edit_trade, open_trade
from trade_journal.calculations.pnl_calcs import (
    ExitScenarios,
    compute_pnl,
    effective_leverage,
    exit_scenarios,
)
from trade_journal.calculations.stats_calcs import (
    TradeStats,
    pnl_over_time,
    split_by_status,
    summarize,
)
from trade_journal.calculations.types import (
    NotComputable,
    PnlResult,
    Rejected,
    TradeDirection,
    TradeMode,
    TradeSnapshot,
    TradeStatus,
)

__all__ = [
    # Types
    "TradeMode",
    "TradeDirection",
    "TradeStatus",
    "TradeSnapshot",
    "PnlResult",
    "NotComputable",
    "Rejected",
    # PnL calculations
    "compute_pnl",
    "effective_leverage",
    "exit_scenarios",
    "ExitScenarios",
    # Lifecycle
    "open_trade",
    "close_trade",
    "edit_trade",
    # Statistics
    "TradeStats",
    "summarize",
    "split_by_status",
    "pnl_over_time",
]
