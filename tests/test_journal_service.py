from __future__ import annotations

from typing import Callable

import pytest

from trade_journal.journal.records import TradeRecord
from trade_journal.journal.service import (
    breakdown_records,
    build_weekly_review,
    completed_outcomes,
    enrich_trade,
    summarize_records,
)


def test_enrich_open_trade(make_record: Callable[..., TradeRecord]) -> None:
    record = enrich_trade(make_record())

    assert record.day_of_week == "Wednesday"
    assert record.session == "London Close"
    assert record.risk_dollar == pytest.approx(100.0)
    assert record.position_size == 20.0
    assert record.risk_reward_ratio == 3.0
    assert record.pl_dollar is None
    assert record.trade_result is None


def test_enrich_closed_trade(make_record: Callable[..., TradeRecord]) -> None:
    record = enrich_trade(make_record(exit_price=115.0, exit_time="23:45"))

    assert record.pl_dollar == 300.0
    assert record.pl_percent == 15.0
    assert record.trade_result == "Win"
    assert record.trade_duration == "2h 30m"


def test_enrich_keeps_given_labels_and_size(make_record: Callable[..., TradeRecord]) -> None:
    record = enrich_trade(
        make_record(session="Asian Session", position_size=10.0, exit_price=90.0)
    )
    assert record.session == "Asian Session"
    assert record.pl_dollar == -100.0
    assert record.trade_result == "Loss"


def test_enrich_rounds_position_size(make_record: Callable[..., TradeRecord]) -> None:
    record = enrich_trade(make_record(stop_loss=97.0))
    assert record.position_size == 33.3333


def _week(make_record: Callable[..., TradeRecord]) -> list[TradeRecord]:
    return [
        enrich_trade(
            make_record(
                id="a",
                trade_date="2024-01-01",
                trade_time="22:30",
                exit_price=110.0,
                m1_entry_type="Breaker",
            )
        ),
        enrich_trade(
            make_record(
                id="b",
                trade_date="2024-01-02",
                trade_time="10:00",
                exit_price=97.0,
                m1_entry_type="FVG",
            )
        ),
        enrich_trade(make_record(id="c", trade_date="2024-01-04", trade_time="21:00")),
        enrich_trade(make_record(id="d", trade_date="2024-01-10", exit_price=120.0)),
    ]


def test_summarize_records_skips_open_trades(make_record: Callable[..., TradeRecord]) -> None:
    summary = summarize_records(_week(make_record))
    assert summary.total_trades == 3
    assert summary.wins == 2
    assert summary.losses == 1


def test_breakdown_records(make_record: Callable[..., TradeRecord]) -> None:
    buckets = breakdown_records(_week(make_record), "session")
    assert buckets["NY Session"].pl == pytest.approx(200.0)
    assert buckets["Asian Session"].losses == 1
    assert "London Close" in buckets

    with pytest.raises(ValueError):
        breakdown_records([], "symbol")


def test_build_weekly_review(make_record: Callable[..., TradeRecord]) -> None:
    review = build_weekly_review(_week(make_record), "2024-01-03")

    assert review.week_start_date == "2023-12-31"
    assert review.week_end_date == "2024-01-06"
    assert review.total_trades == 3
    assert review.win_rate == 50.0
    assert review.profit_factor == 3.333
    assert review.average_rr == 3.0
    assert review.best_trade_rr == 3.0
    assert review.worst_trade_rr == 0.0
    assert review.best_session == "NY Session"
    assert review.best_entry_type == "Breaker"
    assert review.result_counts == {"Win": 1, "Loss": 1, "Break Even": 0}


def test_build_weekly_review_empty_week(make_record: Callable[..., TradeRecord]) -> None:
    review = build_weekly_review(_week(make_record), "2024-02-01")
    assert review.total_trades == 0
    assert review.profit_factor == 0
    assert review.best_session == ""


def test_streaks_follow_trade_dates_not_logging_order(
    make_record: Callable[..., TradeRecord],
) -> None:
    records = [
        enrich_trade(make_record(id="newest", trade_date="2024-01-05", exit_price=97.0)),
        enrich_trade(
            make_record(id="second", trade_date="2024-01-03", trade_time="10:00", exit_price=110.0)
        ),
        enrich_trade(
            make_record(id="first", trade_date="2024-01-03", trade_time="9:30", exit_price=105.0)
        ),
    ]

    summary = summarize_records(records)

    assert summary.best_streak == 2
    assert summary.current_streak.count == 1
    assert summary.current_streak.kind == "L"
    assert [outcome.pl_dollar for outcome in completed_outcomes(records)] == [100.0, 200.0, -60.0]
