"""Value types shared by the PnL engine, trade lifecycle and statistics."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TradeMode(str, Enum):
    SPOT = "SPOT"
    FUTURES = "FUTURES"


class TradeDirection(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED_EARLY = "CLOSED_EARLY"
    STOP_LOSS = "STOP_LOSS"
    TAKE_PROFIT = "TAKE_PROFIT"

    @property
    def is_closed(self) -> bool:
        return self is not TradeStatus.OPEN


@dataclass(frozen=True, slots=True)
class TradeSnapshot:
    """Immutable view of a single trade.

    Attributes:
        id: Opaque identifier assigned when the trade is opened
        owner_id: Identifier of the user owning the trade
        mode: SPOT or FUTURES
        pair: Uppercase instrument symbol, e.g. "BTCUSDT"
        direction: LONG/SHORT for futures, None for spot
        leverage: Positive multiplier for futures, None for spot
        margin: Capital committed to the position
        entry_price: Price the position was opened at
        stop_loss: Optional pre-declared stop-loss price
        take_profit: Optional pre-declared take-profit price
        close_price: Exit price, set once the trade is closed
        pnl: Realized profit/loss, set once the trade is closed
        pnl_percent: pnl relative to margin, in percent
        status: Lifecycle status
        created_at: When the trade was opened
        closed_at: When the trade left OPEN
    """

    id: str
    owner_id: str
    mode: TradeMode
    pair: str
    margin: float
    entry_price: float
    created_at: datetime
    direction: TradeDirection | None = None
    leverage: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    close_price: float | None = None
    pnl: float | None = None
    pnl_percent: float | None = None
    status: TradeStatus = TradeStatus.OPEN
    closed_at: datetime | None = None

    @property
    def is_closed(self) -> bool:
        return self.status.is_closed


@dataclass(frozen=True, slots=True)
class PnlResult:
    """Profit/loss of a position at a given exit price."""

    pnl: float
    pnl_percent: float


@dataclass(frozen=True, slots=True)
class NotComputable:
    """PnL inputs are missing or not usable numbers.

    Returned instead of raised so callers can tell "nothing to show yet"
    apart from a real failure.
    """

    reason: str


@dataclass(frozen=True, slots=True)
class Rejected:
    """A lifecycle transition or edit that would break a trade invariant."""

    reason: str
