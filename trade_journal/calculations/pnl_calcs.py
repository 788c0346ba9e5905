"""Pure calculation functions for position profit/loss."""

import math
from dataclasses import dataclass
from numbers import Real

from trade_journal.calculations.types import (
    NotComputable,
    PnlResult,
    TradeDirection,
    TradeMode,
)


@dataclass(frozen=True, slots=True)
class ExitScenarios:
    """Hypothetical PnL if the position exits at its stop-loss or take-profit."""

    stop_loss: PnlResult | NotComputable
    take_profit: PnlResult | NotComputable


def usable_number(value: object) -> float | None:
    """Return value as a float if it is a finite, non-zero real number."""
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number) or number == 0:
        return None
    return number


def effective_leverage(mode: TradeMode | str, leverage: float | None) -> float:
    """Leverage applied to margin. Spot positions are never leveraged."""
    if mode != TradeMode.FUTURES:
        return 1.0
    return float(leverage) if leverage is not None else 1.0


def compute_pnl(
    mode: TradeMode | str,
    direction: TradeDirection | str | None,
    entry_price: float | None,
    exit_price: float | None,
    margin: float | None,
    leverage: float | None = None,
) -> PnlResult | NotComputable:
    """
    Calculate PnL of a position closed at exit_price.

    position_size = margin * effective leverage
    PnL = position_size * price change ratio, where the ratio is measured
    against entry_price and inverted for futures shorts.
    pnl_percent = PnL / margin * 100 (return on committed capital).

    Direction is ignored for spot. Nothing is rounded.
    """
    entry = usable_number(entry_price)
    if entry is None:
        return NotComputable("entry_price missing")
    exit_ = usable_number(exit_price)
    if exit_ is None:
        return NotComputable("exit_price missing")
    capital = usable_number(margin)
    if capital is None:
        return NotComputable("margin missing")

    if mode == TradeMode.FUTURES and leverage is not None:
        if (
            isinstance(leverage, bool)
            or not isinstance(leverage, Real)
            or not math.isfinite(leverage)
        ):
            return NotComputable("leverage must be a finite number")

    position_size = capital * effective_leverage(mode, leverage)
    is_short = mode == TradeMode.FUTURES and direction == TradeDirection.SHORT

    if is_short:
        price_change_ratio = (entry - exit_) / entry
    else:
        price_change_ratio = (exit_ - entry) / entry

    pnl = position_size * price_change_ratio
    return PnlResult(pnl=pnl, pnl_percent=(pnl / capital) * 100)


def exit_scenarios(
    mode: TradeMode | str,
    direction: TradeDirection | str | None,
    entry_price: float | None,
    margin: float | None,
    leverage: float | None = None,
    stop_loss: float | None = None,
    take_profit: float | None = None,
) -> ExitScenarios:
    """PnL at the stop-loss and take-profit levels of a (possibly unsaved) trade."""

    def scenario(level: float | None, name: str) -> PnlResult | NotComputable:
        if usable_number(level) is None:
            return NotComputable(f"{name} missing")
        return compute_pnl(mode, direction, entry_price, level, margin, leverage)

    return ExitScenarios(
        stop_loss=scenario(stop_loss, "stop_loss"),
        take_profit=scenario(take_profit, "take_profit"),
    )
