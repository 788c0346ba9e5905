"""Pydantic schemas for the trades API."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trade_journal.calculations import TradeDirection, TradeMode, TradeStatus


class TradeCreate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    pair: str = Field(min_length=1, max_length=30)
    mode: TradeMode = TradeMode.SPOT
    direction: TradeDirection | None = None
    leverage: float | None = Field(default=None, gt=0)
    margin: float = Field(gt=0)
    entry_price: float = Field(gt=0)
    stop_loss: float | None = Field(default=None, gt=0)
    take_profit: float | None = Field(default=None, gt=0)

    @field_validator("pair")
    @classmethod
    def _normalize_pair(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text.upper()


class TradeUpdate(BaseModel):
    """Partial edit. Only fields present in the request are applied."""

    model_config = ConfigDict(allow_inf_nan=False)

    pair: str | None = Field(default=None, min_length=1, max_length=30)
    mode: TradeMode | None = None
    direction: TradeDirection | None = None
    leverage: float | None = Field(default=None, gt=0)
    margin: float | None = Field(default=None, gt=0)
    entry_price: float | None = Field(default=None, gt=0)
    stop_loss: float | None = Field(default=None, gt=0)
    take_profit: float | None = Field(default=None, gt=0)
    close_price: float | None = Field(default=None, gt=0)


class TradeClose(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    reason: TradeStatus
    close_price: float | None = None  # required for CLOSED_EARLY


class TradeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    mode: TradeMode
    pair: str
    direction: TradeDirection | None
    leverage: float | None
    margin: float
    entry_price: float
    stop_loss: float | None
    take_profit: float | None
    close_price: float | None
    pnl: float | None
    pnl_percent: float | None
    status: TradeStatus
    created_at: datetime
    closed_at: datetime | None


class PnlPreviewRequest(BaseModel):
    """Possibly incomplete trade form; missing inputs yield no value."""

    mode: TradeMode = TradeMode.SPOT
    direction: TradeDirection | None = None
    leverage: float | None = None
    margin: float | None = None
    entry_price: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None


class ScenarioRead(BaseModel):
    pnl: float | None = None
    pnl_percent: float | None = None
    detail: str | None = None  # why no value was computed


class PnlPreviewRead(BaseModel):
    stop_loss: ScenarioRead
    take_profit: ScenarioRead


class TradeStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_trades: int
    win_rate: float
    total_pnl: float
    average_win: float
    average_loss: float
    winning_trades: int
    losing_trades: int


class PnlPoint(BaseModel):
    date: date
    cumulative_pnl: float
