"""Shared value types for trade analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, cast

from trade_journal.errors import InvalidInputError

Direction = Literal["Long", "Short"]
TradeResult = Literal["Win", "Loss", "Break Even"]
SessionLabel = Literal["London Close", "NY Session", "Asian Session"]
StreakKind = Literal["W", "L"]

DIRECTIONS: tuple[Direction, ...] = ("Long", "Short")


def parse_direction(value: object) -> Direction:
    """Normalize a direction label, accepting any letter case."""
    if isinstance(value, str):
        normalized = value.strip().capitalize()
        if normalized in DIRECTIONS:
            return cast(Direction, normalized)
    raise InvalidInputError("direction", value, "must be Long or Short")


@dataclass(slots=True)
class TradeInput:
    """Caller-supplied facts about one trade."""

    entry_price: float
    stop_loss: float
    direction: Direction
    account_balance: float
    risk_percent: float
    exit_price: float | None = None
    take_profit: float | None = None


@dataclass(slots=True)
class RiskMetrics:
    """Sizing and reward/risk for one trade before it is closed."""

    risk_dollar: float
    position_size: float
    risk_reward_ratio: float | None


@dataclass(slots=True)
class PositionPlan:
    """Direction-aware position calculator output."""

    risk_amount: float
    position_size: float
    position_value: float
    leverage: float


@dataclass(frozen=True, slots=True)
class ProfitAndLoss:
    """Realized profit or loss in dollars and percent of notional."""

    pl_dollar: float
    pl_percent: float | None


@dataclass(frozen=True, slots=True)
class TradeOutcome:
    """Realized result of one closed trade."""

    pl_dollar: float
    pl_percent: float | None
    result: TradeResult
    risk_reward_ratio: float | None = None


@dataclass(frozen=True, slots=True)
class Streak:
    """Run of consecutive wins or losses."""

    count: int
    kind: StreakKind


@dataclass(slots=True)
class PerformanceSummary:
    """Rollup of completed trades."""

    total_trades: int
    wins: int
    losses: int
    break_evens: int
    win_rate: float
    profit_factor: float
    profit_factor_saturated: bool
    total_pl: float
    total_pl_percent: float
    average_rr: float
    largest_win: float
    largest_loss: float
    best_trade_rr: float
    worst_trade_rr: float
    best_streak: int
    current_streak: Streak = field(default_factory=lambda: Streak(count=0, kind="W"))


@dataclass(slots=True)
class BucketStats:
    """Per-bucket counters for session, entry type or weekday breakdowns."""

    trades: int = 0
    wins: int = 0
    losses: int = 0
    pl: float = 0.0
    rrs: list[float] = field(default_factory=list)

    @property
    def average_rr(self) -> float | None:
        if not self.rrs:
            return None
        return sum(self.rrs) / len(self.rrs)
