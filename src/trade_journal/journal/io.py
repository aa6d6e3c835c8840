"""Trade export loading helpers."""

from __future__ import annotations

from pathlib import Path

import pandas as pd  # type: ignore[import-untyped]

from trade_journal.journal.records import TradeRecord

_REQUIRED_COLUMNS = [
    "id",
    "trade_date",
    "trade_time",
    "account_balance",
    "direction",
    "entry_price",
    "stop_loss",
    "risk_percent",
]
_NUMERIC_COLUMNS = [
    "account_balance",
    "entry_price",
    "stop_loss",
    "take_profit",
    "exit_price",
    "position_size",
    "risk_percent",
    "risk_dollar",
    "risk_reward_ratio",
    "pl_dollar",
    "pl_percent",
]


def load_trades_csv(path: Path) -> list[TradeRecord]:
    """Load an exported trades CSV into validated records, oldest first."""
    df = pd.read_csv(path, dtype={"id": str})
    return records_from_frame(df)


def records_from_frame(df: pd.DataFrame) -> list[TradeRecord]:
    """Validate a trades dataframe and convert it to records."""
    missing = [col for col in _REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"missing_trade_columns: {','.join(missing)}")

    normalized = df.copy()
    for col in _NUMERIC_COLUMNS:
        if col in normalized.columns:
            normalized[col] = pd.to_numeric(normalized[col], errors="coerce")
    normalized["id"] = normalized["id"].astype(str)

    # Missing cells arrive as NaN; the record schema expects None.
    normalized = normalized.astype(object).where(pd.notna(normalized), None)
    rows = normalized.to_dict(orient="records")
    records = [
        TradeRecord.parse_row({str(key): value for key, value in row.items() if value is not None})
        for row in rows
    ]
    return sorted(records, key=TradeRecord.sort_key)


def records_to_frame(records: list[TradeRecord]) -> pd.DataFrame:
    """Convert records to a dataframe for export."""
    return pd.DataFrame([record.model_dump() for record in records])
