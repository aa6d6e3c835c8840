from __future__ import annotations

from typing import Any, Callable

import pytest

from trade_journal.journal.records import TradeRecord


@pytest.fixture
def make_record() -> Callable[..., TradeRecord]:
    def _make(**overrides: Any) -> TradeRecord:
        row: dict[str, Any] = {
            "id": "t1",
            "trade_date": "2024-01-03",
            "trade_time": "21:15",
            "account_balance": 10_000.0,
            "direction": "Long",
            "entry_price": 100.0,
            "stop_loss": 95.0,
            "take_profit": 115.0,
            "risk_percent": 1.0,
        }
        row.update(overrides)
        return TradeRecord.parse_row(row)

    return _make
