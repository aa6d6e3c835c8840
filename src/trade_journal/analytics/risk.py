"""Position sizing and reward/risk rules."""

from __future__ import annotations

from trade_journal.analytics.numeric import optional_finite, require_finite, round_fixed
from trade_journal.types import PositionPlan, RiskMetrics, TradeInput, parse_direction


def risk_dollar(balance: float, risk_percent: float) -> float:
    """Dollar amount at risk for a balance and risk percentage.

    The percentage is not clamped; values outside 0-100 scale linearly.
    """
    balance = require_finite("balance", balance)
    risk_percent = require_finite("risk_percent", risk_percent)
    return balance * (risk_percent / 100.0)


def position_size(risk_amount: float, entry: float, stop_loss: float) -> float:
    """Units to trade so that hitting the stop loses ``risk_amount``.

    Returns 0.0 when entry equals stop loss: the trade cannot be sized.
    """
    risk_amount = require_finite("risk_dollar", risk_amount)
    entry = require_finite("entry", entry)
    stop_loss = require_finite("stop_loss", stop_loss)
    per_unit_risk = abs(entry - stop_loss)
    if per_unit_risk == 0:
        return 0.0
    return risk_amount / per_unit_risk


def risk_reward_ratio(entry: float, take_profit: float | None, stop_loss: float) -> float | None:
    """Reward over risk, rounded to 3 places.

    ``None`` means the ratio is not computable: no take profit was given
    (``None`` or 0) or entry equals stop loss.
    """
    entry = require_finite("entry", entry)
    stop_loss = require_finite("stop_loss", stop_loss)
    take_profit = optional_finite("take_profit", take_profit)
    if not take_profit:
        return None
    risk = abs(entry - stop_loss)
    if risk == 0:
        return None
    reward = abs(take_profit - entry)
    return round_fixed(reward / risk, 3)


def compute_risk_metrics(trade: TradeInput) -> RiskMetrics:
    """Compute risk dollar, position size and reward/risk for one trade."""
    amount = risk_dollar(trade.account_balance, trade.risk_percent)
    return RiskMetrics(
        risk_dollar=amount,
        position_size=position_size(amount, trade.entry_price, trade.stop_loss),
        risk_reward_ratio=risk_reward_ratio(trade.entry_price, trade.take_profit, trade.stop_loss),
    )


def position_calculator(
    balance: float,
    risk_percent: float,
    entry: float,
    stop_loss: float,
    direction: str,
) -> PositionPlan:
    """Direction-aware sizing for the standalone calculator.

    A stop on the wrong side of entry for the direction yields a zero size.
    Leverage is position value over balance.
    """
    side = parse_direction(direction)
    entry = require_finite("entry", entry)
    stop_loss = require_finite("stop_loss", stop_loss)
    if not entry or not stop_loss:
        return PositionPlan(risk_amount=0.0, position_size=0.0, position_value=0.0, leverage=0.0)

    amount = risk_dollar(balance, risk_percent)
    price_diff = entry - stop_loss if side == "Long" else stop_loss - entry
    if price_diff <= 0:
        return PositionPlan(risk_amount=amount, position_size=0.0, position_value=0.0, leverage=0.0)

    size = amount / price_diff
    value = size * entry
    leverage = value / balance if balance else 0.0
    return PositionPlan(
        risk_amount=amount,
        position_size=size,
        position_value=value,
        leverage=leverage,
    )
