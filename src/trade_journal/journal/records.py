"""Stored trade row schema and strict parsing helpers."""

from __future__ import annotations

from datetime import date, time
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from trade_journal.analytics.calendar import parse_clock
from trade_journal.analytics.outcome import classify_result
from trade_journal.errors import InvalidInputError
from trade_journal.types import Direction, SessionLabel, TradeInput, TradeOutcome, TradeResult, parse_direction


class TradeRecord(BaseModel):
    """One journal entry as held by the persistence collaborator."""

    model_config = ConfigDict(extra="ignore")

    id: str
    trade_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}")
    trade_time: str = Field(pattern=r"^\d{1,2}:\d{2}(:\d{2})?$")
    exit_time: str | None = Field(default=None, pattern=r"^\d{1,2}:\d{2}(:\d{2})?$")
    day_of_week: str | None = None
    session: SessionLabel | None = None
    account_balance: float = Field(gt=0, allow_inf_nan=False)
    direction: Direction
    entry_price: float = Field(gt=0, allow_inf_nan=False)
    stop_loss: float = Field(gt=0, allow_inf_nan=False)
    take_profit: float | None = Field(default=None, allow_inf_nan=False)
    exit_price: float | None = Field(default=None, allow_inf_nan=False)
    position_size: float | None = Field(default=None, allow_inf_nan=False)
    risk_percent: float = Field(gt=0, le=100, allow_inf_nan=False)
    risk_dollar: float | None = None
    risk_reward_ratio: float | None = None
    pl_dollar: float | None = None
    pl_percent: float | None = None
    trade_result: TradeResult | None = None
    trade_duration: str | None = None
    m1_entry_type: str | None = None
    break_even_applied: bool = False
    exit_reason: str | None = None

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: Any) -> Direction:
        """Accept direction labels in any letter case."""
        return parse_direction(v)

    @field_validator("trade_date")
    @classmethod
    def check_calendar_date(cls, v: str) -> str:
        """Reject dates that match the pattern but do not exist, like 2024-02-30."""
        date.fromisoformat(v[:10])
        return v

    @field_validator("trade_time", "exit_time")
    @classmethod
    def check_clock(cls, v: str | None) -> str | None:
        if v is not None:
            parse_clock(v)
        return v

    @model_validator(mode="after")
    def check_stop_side(self) -> "TradeRecord":
        """Long stops sit below entry, short stops above."""
        if self.direction == "Long" and self.stop_loss >= self.entry_price:
            raise ValueError("for long trades, stop loss must be below entry price")
        if self.direction == "Short" and self.stop_loss <= self.entry_price:
            raise ValueError("for short trades, stop loss must be above entry price")
        return self

    @property
    def is_completed(self) -> bool:
        return self.pl_dollar is not None

    def sort_key(self) -> tuple[date, time]:
        """Chronological position of the trade: calendar date, then entry time."""
        return date.fromisoformat(self.trade_date[:10]), parse_clock(self.trade_time)

    @classmethod
    def parse_row(cls, row: dict[str, Any]) -> "TradeRecord":
        """Parse a raw row, mapping schema violations to InvalidInputError."""
        try:
            return cls.model_validate(row)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "trade"
            raise InvalidInputError(field, first.get("input"), first["msg"]) from exc

    def to_input(self) -> TradeInput:
        """Engine-facing view of this record."""
        return TradeInput(
            entry_price=self.entry_price,
            stop_loss=self.stop_loss,
            direction=self.direction,
            account_balance=self.account_balance,
            risk_percent=self.risk_percent,
            exit_price=self.exit_price,
            take_profit=self.take_profit,
        )

    def to_outcome(self) -> TradeOutcome | None:
        """Stored outcome, or None while the trade is open."""
        if not self.is_completed:
            return None
        assert self.pl_dollar is not None
        return TradeOutcome(
            pl_dollar=self.pl_dollar,
            pl_percent=self.pl_percent,
            result=self.trade_result or classify_result(self.pl_dollar),
            risk_reward_ratio=self.risk_reward_ratio,
        )


class WeeklyReview(BaseModel):
    """Computed weekly review figures."""

    model_config = ConfigDict(extra="forbid")

    week_start_date: str
    week_end_date: str
    total_trades: int = Field(ge=0)
    win_rate: float
    average_rr: float
    profit_factor: float
    best_trade_rr: float
    worst_trade_rr: float
    best_session: str = ""
    best_entry_type: str = ""
    result_counts: dict[Literal["Win", "Loss", "Break Even"], int] = Field(default_factory=dict)
