"""Trade analytics engine exports."""

from trade_journal.analytics.aggregation import (
    PROFIT_FACTOR_SATURATED,
    best_bucket,
    breakdown,
    profit_factor,
    summarize_performance,
    win_rate,
)
from trade_journal.analytics.calendar import (
    day_of_week,
    format_duration,
    session_from_hour,
    session_from_time,
    week_bounds,
)
from trade_journal.analytics.outcome import classify_result, compute_outcome, profit_and_loss
from trade_journal.analytics.risk import (
    compute_risk_metrics,
    position_calculator,
    position_size,
    risk_dollar,
    risk_reward_ratio,
)

__all__ = [
    "PROFIT_FACTOR_SATURATED",
    "best_bucket",
    "breakdown",
    "classify_result",
    "compute_outcome",
    "compute_risk_metrics",
    "day_of_week",
    "format_duration",
    "position_calculator",
    "position_size",
    "profit_and_loss",
    "profit_factor",
    "risk_dollar",
    "risk_reward_ratio",
    "session_from_hour",
    "session_from_time",
    "summarize_performance",
    "week_bounds",
    "win_rate",
]
