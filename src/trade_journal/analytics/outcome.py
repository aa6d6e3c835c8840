"""Realized profit/loss and result classification."""

from __future__ import annotations

from trade_journal.analytics.numeric import require_finite, round_fixed
from trade_journal.errors import InvalidInputError
from trade_journal.types import ProfitAndLoss, TradeInput, TradeOutcome, TradeResult, parse_direction


def profit_and_loss(
    entry: float,
    exit_price: float,
    position_size: float,
    direction: str,
) -> ProfitAndLoss:
    """Compute realized P&L in dollars and as a percent of entry notional.

    Shorts profit when price falls. Both figures are rounded to 2 places;
    the percentage is derived from the unrounded dollar amount. When the
    entry notional is zero the percentage is ``None``.
    """
    side = parse_direction(direction)
    entry = require_finite("entry", entry)
    exit_price = require_finite("exit_price", exit_price)
    position_size = require_finite("position_size", position_size)

    if side == "Long":
        price_difference = exit_price - entry
    else:
        price_difference = entry - exit_price
    pl_dollar = price_difference * position_size

    notional = abs(entry * position_size)
    pl_percent = round_fixed(pl_dollar / notional * 100.0, 2) if notional else None
    return ProfitAndLoss(pl_dollar=round_fixed(pl_dollar, 2), pl_percent=pl_percent)


def classify_result(pl_dollar: float) -> TradeResult:
    """Win, Loss or Break Even by the sign of the rounded dollar P&L."""
    pl_dollar = require_finite("pl_dollar", pl_dollar)
    if pl_dollar > 0:
        return "Win"
    if pl_dollar < 0:
        return "Loss"
    return "Break Even"


def compute_outcome(
    trade: TradeInput,
    position_size: float,
    exit_price: float | None = None,
    risk_reward_ratio: float | None = None,
) -> TradeOutcome:
    """Build the outcome of a closed trade.

    ``exit_price`` defaults to the trade's own exit price; an open trade
    without one is rejected.
    """
    exit_value = trade.exit_price if exit_price is None else exit_price
    if exit_value is None:
        raise InvalidInputError("exit_price", None, "trade is still open")
    pnl = profit_and_loss(trade.entry_price, exit_value, position_size, trade.direction)
    return TradeOutcome(
        pl_dollar=pnl.pl_dollar,
        pl_percent=pnl.pl_percent,
        result=classify_result(pnl.pl_dollar),
        risk_reward_ratio=risk_reward_ratio,
    )
