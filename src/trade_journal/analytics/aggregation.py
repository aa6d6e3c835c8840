"""Performance rollups over completed trades."""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, Sequence

from trade_journal.analytics.numeric import require_finite, round_fixed
from trade_journal.types import BucketStats, PerformanceSummary, Streak, StreakKind, TradeOutcome

# Reported when there are winning trades but no losses; not a real ratio.
PROFIT_FACTOR_SATURATED = 999.99


def win_rate(wins: int, total_trades: int) -> float:
    """Percentage of winning trades, 0 when there are no trades."""
    wins_value = require_finite("wins", wins)
    total = require_finite("total_trades", total_trades)
    if total == 0:
        return 0.0
    return round_fixed(wins_value / total * 100.0, 2)


def profit_factor(total_wins: float, total_losses: float) -> float:
    """Gross wins over gross losses, rounded to 3 places.

    With no losses the result is :data:`PROFIT_FACTOR_SATURATED` if anything
    was won and 0 otherwise.
    """
    total_wins = require_finite("total_wins", total_wins)
    total_losses = require_finite("total_losses", total_losses)
    if total_losses == 0:
        return PROFIT_FACTOR_SATURATED if total_wins > 0 else 0.0
    return round_fixed(total_wins / abs(total_losses), 3)


def summarize_performance(outcomes: Sequence[TradeOutcome]) -> PerformanceSummary:
    """Roll completed trade outcomes into one summary.

    ``outcomes`` are ordered oldest first; the current streak is counted
    back from the last one.
    """
    wins = [o for o in outcomes if o.result == "Win"]
    losses = [o for o in outcomes if o.result == "Loss"]
    pl_values = [o.pl_dollar for o in outcomes]
    rr_values = [o.risk_reward_ratio or 0.0 for o in outcomes]

    gross_wins = sum(o.pl_dollar for o in wins)
    gross_losses = abs(sum(o.pl_dollar for o in losses))
    average_rr = sum(rr_values) / len(outcomes) if outcomes else 0.0

    return PerformanceSummary(
        total_trades=len(outcomes),
        wins=len(wins),
        losses=len(losses),
        break_evens=len(outcomes) - len(wins) - len(losses),
        win_rate=win_rate(len(wins), len(outcomes)),
        profit_factor=profit_factor(gross_wins, gross_losses),
        profit_factor_saturated=gross_losses == 0 and gross_wins > 0,
        total_pl=round_fixed(sum(pl_values), 2),
        total_pl_percent=round_fixed(sum(o.pl_percent or 0.0 for o in outcomes), 2),
        average_rr=round_fixed(average_rr, 3),
        largest_win=max([*pl_values, 0.0]),
        largest_loss=min([*pl_values, 0.0]),
        best_trade_rr=max([*rr_values, 0.0]),
        worst_trade_rr=min([*rr_values, 0.0]),
        best_streak=best_streak(outcomes),
        current_streak=current_streak(outcomes),
    )


def best_streak(outcomes: Iterable[TradeOutcome]) -> int:
    """Longest run of consecutive wins or consecutive losses.

    Break-even trades neither extend nor reset a run.
    """
    best = 0
    run_wins = 0
    run_losses = 0
    for outcome in outcomes:
        if outcome.result == "Win":
            run_wins += 1
            run_losses = 0
            best = max(best, run_wins)
        elif outcome.result == "Loss":
            run_losses += 1
            run_wins = 0
            best = max(best, run_losses)
    return best


def current_streak(outcomes: Sequence[TradeOutcome]) -> Streak:
    """Run of wins or losses ending at the most recent outcome."""
    if not outcomes:
        return Streak(count=0, kind="W")
    kind: StreakKind = "W" if outcomes[-1].result == "Win" else "L"
    target = "Win" if kind == "W" else "Loss"
    count = 0
    for outcome in reversed(outcomes):
        if outcome.result != target:
            break
        count += 1
    return Streak(count=count, kind=kind)


def breakdown(pairs: Iterable[tuple[str | None, TradeOutcome]]) -> dict[str, BucketStats]:
    """Group outcomes by label (session, entry type, weekday).

    Outcomes without a label are skipped.
    """
    buckets: dict[str, BucketStats] = {}
    for label, outcome in pairs:
        if not label:
            continue
        stats = buckets.setdefault(label, BucketStats())
        stats.trades += 1
        stats.pl += outcome.pl_dollar
        if outcome.risk_reward_ratio:
            stats.rrs.append(outcome.risk_reward_ratio)
        if outcome.result == "Win":
            stats.wins += 1
        elif outcome.result == "Loss":
            stats.losses += 1
    return buckets


def best_bucket(pairs: Iterable[tuple[str | None, TradeOutcome]]) -> str | None:
    """Label with the highest total P&L, first seen wins ties."""
    buckets = breakdown(pairs)
    if not buckets:
        return None
    return max(buckets, key=lambda label: buckets[label].pl)


def summary_as_row(summary: PerformanceSummary) -> dict[str, object]:
    """Convert a summary to a serializable row dict."""
    return asdict(summary)


def breakdown_as_rows(buckets: dict[str, BucketStats]) -> list[dict[str, object]]:
    """Convert breakdown buckets to serializable row dicts."""
    rows: list[dict[str, object]] = []
    for label, stats in buckets.items():
        average_rr = stats.average_rr
        rows.append(
            {
                "label": label,
                "trades": stats.trades,
                "wins": stats.wins,
                "losses": stats.losses,
                "win_rate": win_rate(stats.wins, stats.trades),
                "pl": round_fixed(stats.pl, 2),
                "average_rr": round_fixed(average_rr, 2) if average_rr is not None else None,
            }
        )
    return rows
