from __future__ import annotations

import math

import pytest

from trade_journal.analytics.outcome import classify_result, compute_outcome, profit_and_loss
from trade_journal.errors import InvalidInputError
from trade_journal.types import TradeInput


def test_long_profit_and_loss() -> None:
    pnl = profit_and_loss(100, 115, 20, "Long")
    assert pnl.pl_dollar == 300.0
    assert pnl.pl_percent == 15.0


def test_short_profits_when_price_falls() -> None:
    win = profit_and_loss(100, 90, 10, "Short")
    assert win.pl_dollar == 100.0
    assert win.pl_percent == 10.0

    loss = profit_and_loss(100, 110, 10, "Short")
    assert loss.pl_dollar == -100.0
    assert loss.pl_percent == -10.0


def test_profit_and_loss_rounds_to_two_places() -> None:
    pnl = profit_and_loss(3, 4, 0.33333, "Long")
    assert pnl.pl_dollar == 0.33
    assert pnl.pl_percent == 33.33


def test_percent_is_none_for_zero_notional() -> None:
    no_size = profit_and_loss(100, 110, 0, "Long")
    assert no_size.pl_dollar == 0.0
    assert no_size.pl_percent is None

    zero_entry = profit_and_loss(0, 5, 10, "Long")
    assert zero_entry.pl_dollar == 50.0
    assert zero_entry.pl_percent is None


@pytest.mark.parametrize(
    ("entry", "exit_price", "size"),
    [
        (100.0, 101.0, 1.0),
        (100.0, 99.0, 3.5),
        (2.5, 2.5, 10.0),
        (43_000.0, 42_150.5, 0.02),
        (1.1, 1.1005, 10_000.0),
    ],
)
@pytest.mark.parametrize("direction", ["Long", "Short"])
def test_sign_follows_direction_and_result_matches(
    entry: float, exit_price: float, size: float, direction: str
) -> None:
    pnl = profit_and_loss(entry, exit_price, size, direction)
    move = exit_price - entry if direction == "Long" else entry - exit_price
    if pnl.pl_dollar != 0:
        assert math.copysign(1, pnl.pl_dollar) == math.copysign(1, move)

    result = classify_result(pnl.pl_dollar)
    if pnl.pl_dollar > 0:
        assert result == "Win"
    elif pnl.pl_dollar < 0:
        assert result == "Loss"
    else:
        assert result == "Break Even"


def test_classify_result_exact_zero() -> None:
    assert classify_result(0.01) == "Win"
    assert classify_result(-0.01) == "Loss"
    assert classify_result(0.0) == "Break Even"
    assert classify_result(-0.0) == "Break Even"


def test_profit_and_loss_is_deterministic() -> None:
    assert profit_and_loss(100, 97.3, 12, "Short") == profit_and_loss(100, 97.3, 12, "Short")


def test_compute_outcome_round_trip_scenario() -> None:
    trade = TradeInput(
        entry_price=100,
        stop_loss=95,
        take_profit=115,
        direction="Long",
        account_balance=10_000,
        risk_percent=1,
        exit_price=115,
    )
    outcome = compute_outcome(trade, position_size=20, risk_reward_ratio=3.0)
    assert outcome.pl_dollar == 300.0
    assert outcome.pl_percent == 15.0
    assert outcome.result == "Win"
    assert outcome.risk_reward_ratio == 3.0


def test_compute_outcome_requires_exit_price() -> None:
    trade = TradeInput(
        entry_price=100,
        stop_loss=95,
        direction="Long",
        account_balance=10_000,
        risk_percent=1,
    )
    with pytest.raises(InvalidInputError):
        compute_outcome(trade, position_size=20)
    assert compute_outcome(trade, position_size=20, exit_price=95).result == "Loss"


def test_unknown_direction_is_invalid_input() -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        profit_and_loss(100, 110, 1, "Flat")
    assert exc_info.value.field == "direction"
