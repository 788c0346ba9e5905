"""Trade lifecycle: opening, closing and editing trade snapshots.

A trade starts OPEN and moves exactly once to one of the terminal statuses
CLOSED_EARLY, STOP_LOSS or TAKE_PROFIT. Every operation returns either a new
snapshot or a Rejected value; the input snapshot is never modified.
"""

import uuid
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone

from trade_journal.calculations.pnl_calcs import compute_pnl, usable_number
from trade_journal.calculations.types import (
    NotComputable,
    Rejected,
    TradeDirection,
    TradeMode,
    TradeSnapshot,
    TradeStatus,
)

EDITABLE_FIELDS = frozenset(
    {
        "pair",
        "mode",
        "direction",
        "entry_price",
        "stop_loss",
        "take_profit",
        "margin",
        "leverage",
    }
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _positive(value: object) -> float | None:
    number = usable_number(value)
    if number is None or number < 0:
        return None
    return number


def _normalize_fields(fields: dict) -> dict | Rejected:
    """Validate trade fields as a whole and return their canonical form."""
    try:
        mode = TradeMode(fields["mode"])
    except ValueError:
        return Rejected(f"Unknown trade mode: {fields['mode']!r}")

    pair = fields["pair"]
    if not isinstance(pair, str) or not pair.strip():
        return Rejected("Pair is required.")

    entry_price = _positive(fields["entry_price"])
    if entry_price is None:
        return Rejected("Entry price must be a positive number.")
    margin = _positive(fields["margin"])
    if margin is None:
        return Rejected("Margin must be a positive number.")

    levels = {}
    for name in ("stop_loss", "take_profit"):
        value = fields.get(name)
        if value is None:
            levels[name] = None
            continue
        levels[name] = _positive(value)
        if levels[name] is None:
            label = name.replace("_", " ").capitalize()
            return Rejected(f"{label} must be a positive number when set.")

    direction = fields.get("direction")
    leverage = fields.get("leverage")
    if mode is TradeMode.SPOT:
        if direction is not None:
            return Rejected("Spot trades cannot have a direction.")
        if leverage is not None:
            return Rejected("Spot trades cannot have leverage.")
    else:
        if direction is None:
            return Rejected("Futures trades require a direction (LONG or SHORT).")
        try:
            direction = TradeDirection(direction)
        except ValueError:
            return Rejected(f"Unknown trade direction: {direction!r}")
        if leverage is None:
            leverage = 1.0
        else:
            leverage = _positive(leverage)
            if leverage is None:
                return Rejected("Leverage must be a positive number.")

    return {
        "mode": mode,
        "pair": pair.strip().upper(),
        "direction": direction,
        "leverage": leverage,
        "margin": margin,
        "entry_price": entry_price,
        **levels,
    }


def open_trade(
    owner_id: str,
    mode: TradeMode | str,
    pair: str,
    entry_price: float,
    margin: float,
    direction: TradeDirection | str | None = None,
    leverage: float | None = None,
    stop_loss: float | None = None,
    take_profit: float | None = None,
    *,
    trade_id: str | None = None,
    now: datetime | None = None,
) -> TradeSnapshot | Rejected:
    """Create a new OPEN trade. Futures leverage defaults to 1."""
    if not owner_id:
        return Rejected("You must be logged in to create a trade.")

    fields = _normalize_fields(
        {
            "mode": mode,
            "pair": pair,
            "direction": direction,
            "leverage": leverage,
            "margin": margin,
            "entry_price": entry_price,
            "stop_loss": stop_loss,
            "take_profit": take_profit,
        }
    )
    if isinstance(fields, Rejected):
        return fields

    return TradeSnapshot(
        id=trade_id or str(uuid.uuid4()),
        owner_id=owner_id,
        created_at=now or _utcnow(),
        status=TradeStatus.OPEN,
        **fields,
    )


def resolve_exit_price(
    trade: TradeSnapshot,
    reason: TradeStatus,
    manual_close_price: float | None = None,
) -> float | None:
    """Exit price implied by a closing reason."""
    if reason is TradeStatus.CLOSED_EARLY:
        return manual_close_price
    if reason is TradeStatus.STOP_LOSS:
        return trade.stop_loss
    if reason is TradeStatus.TAKE_PROFIT:
        return trade.take_profit
    return None


def close_trade(
    trade: TradeSnapshot,
    reason: TradeStatus | str,
    manual_close_price: float | None = None,
    *,
    now: datetime | None = None,
) -> TradeSnapshot | Rejected:
    """
    Close an OPEN trade.

    CLOSED_EARLY uses manual_close_price, STOP_LOSS and TAKE_PROFIT use the
    levels stored on the trade. All closing fields are set together or not
    at all.
    """
    try:
        reason = TradeStatus(reason)
    except ValueError:
        return Rejected(f"Unknown close reason: {reason!r}")

    if not reason.is_closed:
        return Rejected("A trade can only be closed to a terminal status.")
    if trade.is_closed:
        return Rejected(f"Trade is already closed ({trade.status.value}).")

    exit_price = _positive(resolve_exit_price(trade, reason, manual_close_price))
    if exit_price is None:
        if reason is TradeStatus.STOP_LOSS:
            return Rejected("No stop loss set on this trade.")
        if reason is TradeStatus.TAKE_PROFIT:
            return Rejected("No take profit set on this trade.")
        return Rejected("A positive close price is required to close early.")

    result = compute_pnl(
        trade.mode,
        trade.direction,
        trade.entry_price,
        exit_price,
        trade.margin,
        trade.leverage,
    )
    if isinstance(result, NotComputable):
        return Rejected(f"PnL could not be computed: {result.reason}.")

    return replace(
        trade,
        status=reason,
        close_price=exit_price,
        pnl=result.pnl,
        pnl_percent=result.pnl_percent,
        closed_at=now or _utcnow(),
    )


def edit_trade(
    trade: TradeSnapshot, changes: Mapping[str, object]
) -> TradeSnapshot | Rejected:
    """
    Rewrite trade fields.

    The merged result must satisfy every field invariant. A closed trade may
    also receive a new close_price; its PnL is recomputed from the merged
    fields whatever was edited, so it never goes stale.
    """
    for key in changes:
        if key == "close_price":
            if not trade.is_closed:
                return Rejected("Close price can only be edited on a closed trade.")
        elif key not in EDITABLE_FIELDS:
            return Rejected(f"Field {key!r} cannot be edited.")

    merged = {name: getattr(trade, name) for name in EDITABLE_FIELDS}
    merged.update((k, v) for k, v in changes.items() if k != "close_price")

    fields = _normalize_fields(merged)
    if isinstance(fields, Rejected):
        return fields

    if not trade.is_closed:
        return replace(trade, **fields)

    close_price = _positive(changes.get("close_price", trade.close_price))
    if close_price is None:
        return Rejected("Close price must be a positive number.")

    result = compute_pnl(
        fields["mode"],
        fields["direction"],
        fields["entry_price"],
        close_price,
        fields["margin"],
        fields["leverage"],
    )
    if isinstance(result, NotComputable):
        return Rejected(f"PnL could not be computed: {result.reason}.")

    return replace(
        trade,
        close_price=close_price,
        pnl=result.pnl,
        pnl_percent=result.pnl_percent,
        **fields,
    )
