from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from trade_journal.calculations.types import (
    TradeDirection,
    TradeMode,
    TradeSnapshot,
    TradeStatus,
)
from trade_journal.models.base import Base

# Columns a snapshot may change after the row is created
MUTABLE_COLUMNS = (
    "mode",
    "pair",
    "direction",
    "leverage",
    "margin",
    "entry_price",
    "stop_loss",
    "take_profit",
    "close_price",
    "pnl",
    "pnl_percent",
    "status",
    "closed_at",
)


class Trade(Base):
    """Manually recorded spot or futures position."""

    __tablename__ = "trades"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(100), index=True)

    mode: Mapped[str] = mapped_column(String(10))  # SPOT, FUTURES
    pair: Mapped[str] = mapped_column(String(30), index=True)

    # Futures only (NULL for spot)
    direction: Mapped[str | None] = mapped_column(String(10))  # LONG, SHORT
    leverage: Mapped[float | None] = mapped_column(Float)

    margin: Mapped[float] = mapped_column(Float)
    entry_price: Mapped[float] = mapped_column(Float)
    stop_loss: Mapped[float | None] = mapped_column(Float)
    take_profit: Mapped[float | None] = mapped_column(Float)

    # Set together when the trade closes
    close_price: Mapped[float | None] = mapped_column(Float)
    pnl: Mapped[float | None] = mapped_column(Float)
    pnl_percent: Mapped[float | None] = mapped_column(Float)

    status: Mapped[str] = mapped_column(String(20), default="OPEN", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def to_snapshot(self) -> TradeSnapshot:
        """Immutable copy of this row for the calculation layer."""
        return TradeSnapshot(
            id=self.id,
            owner_id=self.user_id,
            mode=TradeMode(self.mode),
            pair=self.pair,
            direction=TradeDirection(self.direction) if self.direction else None,
            leverage=self.leverage,
            margin=self.margin,
            entry_price=self.entry_price,
            stop_loss=self.stop_loss,
            take_profit=self.take_profit,
            close_price=self.close_price,
            pnl=self.pnl,
            pnl_percent=self.pnl_percent,
            status=TradeStatus(self.status),
            created_at=self.created_at,
            closed_at=self.closed_at,
        )

    @classmethod
    def from_snapshot(cls, snapshot: TradeSnapshot) -> "Trade":
        return cls(
            id=snapshot.id,
            user_id=snapshot.owner_id,
            created_at=snapshot.created_at,
            **snapshot_columns(snapshot),
        )


def snapshot_columns(snapshot: TradeSnapshot) -> dict:
    """Mutable column values of a snapshot, enums stored by value."""
    columns = {}
    for column in MUTABLE_COLUMNS:
        value = getattr(snapshot, column)
        if isinstance(value, (TradeMode, TradeDirection, TradeStatus)):
            value = value.value
        columns[column] = value
    return columns
