"""Journal workflows: derive stored trade fields and build reviews."""

from __future__ import annotations

from datetime import date
from typing import Callable, Sequence

from trade_journal.analytics.aggregation import (
    best_bucket,
    breakdown,
    summarize_performance,
)
from trade_journal.analytics.calendar import (
    day_of_week,
    format_duration,
    session_from_time,
    week_bounds,
)
from trade_journal.analytics.numeric import round_fixed
from trade_journal.analytics.outcome import classify_result, profit_and_loss
from trade_journal.analytics.risk import position_size, risk_dollar, risk_reward_ratio
from trade_journal.journal.records import TradeRecord, WeeklyReview
from trade_journal.types import BucketStats, PerformanceSummary, TradeOutcome
from trade_journal.utils.logging import get_logger, log_performance_summary, log_trade_recorded

_BREAKDOWN_KEYS: dict[str, Callable[[TradeRecord], str | None]] = {
    "session": lambda record: record.session,
    "entry_type": lambda record: record.m1_entry_type,
    "day_of_week": lambda record: record.day_of_week,
}


def enrich_trade(record: TradeRecord) -> TradeRecord:
    """Fill derived fields of a journal entry before it is stored.

    Calendar labels are only filled when missing. Risk fields are always
    recomputed. Outcome fields are set once an exit price is present.
    """
    logger = get_logger("trade_journal.journal.service")
    updates: dict[str, object] = {}

    if not record.day_of_week:
        updates["day_of_week"] = day_of_week(record.trade_date)
    if record.session is None:
        updates["session"] = session_from_time(record.trade_time)

    amount = risk_dollar(record.account_balance, record.risk_percent)
    size = record.position_size
    if size is None:
        size = round_fixed(position_size(amount, record.entry_price, record.stop_loss), 4)
    updates["risk_dollar"] = amount
    updates["position_size"] = size
    updates["risk_reward_ratio"] = risk_reward_ratio(
        record.entry_price, record.take_profit, record.stop_loss
    )

    if record.exit_price:
        pnl = profit_and_loss(record.entry_price, record.exit_price, size, record.direction)
        updates["pl_dollar"] = pnl.pl_dollar
        updates["pl_percent"] = pnl.pl_percent
        updates["trade_result"] = classify_result(pnl.pl_dollar)
        if record.exit_time:
            updates["trade_duration"] = format_duration(record.trade_time, record.exit_time)

    enriched = record.model_copy(update=updates)
    log_trade_recorded(
        logger,
        trade_id=enriched.id,
        direction=enriched.direction,
        result=enriched.trade_result,
        pl_dollar=enriched.pl_dollar,
        session=enriched.session,
    )
    return enriched


def chronological(records: Sequence[TradeRecord]) -> list[TradeRecord]:
    """Records ordered by trade date and entry time, oldest first."""
    return sorted(records, key=TradeRecord.sort_key)


def completed_outcomes(records: Sequence[TradeRecord]) -> list[TradeOutcome]:
    """Outcomes of closed trades, oldest first."""
    outcomes: list[TradeOutcome] = []
    for record in chronological(records):
        outcome = record.to_outcome()
        if outcome is not None:
            outcomes.append(outcome)
    return outcomes


def summarize_records(records: Sequence[TradeRecord]) -> PerformanceSummary:
    """Performance summary over the closed trades in ``records``."""
    logger = get_logger("trade_journal.journal.service")
    summary = summarize_performance(completed_outcomes(records))
    log_performance_summary(
        logger,
        total_trades=summary.total_trades,
        win_rate=summary.win_rate,
        profit_factor=summary.profit_factor,
        profit_factor_saturated=summary.profit_factor_saturated,
        open_trades=len(records) - summary.total_trades,
    )
    return summary


def breakdown_records(records: Sequence[TradeRecord], key: str) -> dict[str, BucketStats]:
    """Group closed trades by ``session``, ``entry_type`` or ``day_of_week``."""
    return breakdown(_labelled_outcomes(records, key))


def build_weekly_review(records: Sequence[TradeRecord], day: date | str) -> WeeklyReview:
    """Review of the Sunday-to-Saturday week containing ``day``."""
    start, end = week_bounds(day)
    week_records = [
        record
        for record in records
        if start <= record.sort_key()[0] <= end
    ]
    summary = summarize_performance(completed_outcomes(week_records))
    return WeeklyReview(
        week_start_date=start.isoformat(),
        week_end_date=end.isoformat(),
        total_trades=len(week_records),
        win_rate=summary.win_rate,
        average_rr=summary.average_rr,
        profit_factor=summary.profit_factor,
        best_trade_rr=summary.best_trade_rr,
        worst_trade_rr=summary.worst_trade_rr,
        best_session=best_bucket(_labelled_outcomes(week_records, "session")) or "",
        best_entry_type=best_bucket(_labelled_outcomes(week_records, "entry_type")) or "",
        result_counts={
            "Win": summary.wins,
            "Loss": summary.losses,
            "Break Even": summary.break_evens,
        },
    )


def _labelled_outcomes(
    records: Sequence[TradeRecord], key: str
) -> list[tuple[str | None, TradeOutcome]]:
    try:
        label_of = _BREAKDOWN_KEYS[key]
    except KeyError:
        raise ValueError(f"unsupported_breakdown_key: {key}") from None
    pairs: list[tuple[str | None, TradeOutcome]] = []
    for record in chronological(records):
        outcome = record.to_outcome()
        if outcome is not None:
            pairs.append((label_of(record), outcome))
    return pairs
