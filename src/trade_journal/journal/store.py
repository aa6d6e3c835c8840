"""JSONL trade store standing in for the remote journal database."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from trade_journal.journal.records import TradeRecord


class TradeRepository(Protocol):
    """Query/insert/update/delete interface of the journal store."""

    def list_trades(self) -> list[TradeRecord]:
        """Return all stored trades, oldest first."""

    def add_trade(self, record: TradeRecord) -> None:
        """Insert one trade."""

    def update_trade(self, record: TradeRecord) -> None:
        """Replace the trade with the same id."""

    def delete_trade(self, trade_id: str) -> None:
        """Remove one trade by id."""


class JsonlTradeRepository:
    """One trade per line in a local JSONL file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def list_trades(self) -> list[TradeRecord]:
        if not self._path.exists():
            return []
        rows: list[TradeRecord] = []
        for line in self._path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            rows.append(TradeRecord.parse_row(json.loads(line)))
        return rows

    def add_trade(self, record: TradeRecord) -> None:
        if any(row.id == record.id for row in self.list_trades()):
            raise ValueError(f"duplicate_trade_id: {record.id}")
        with self._path.open("a", encoding="utf-8") as f:
            f.write(record.model_dump_json() + "\n")

    def update_trade(self, record: TradeRecord) -> None:
        rows = self.list_trades()
        for idx, row in enumerate(rows):
            if row.id == record.id:
                rows[idx] = record
                self._rewrite(rows)
                return
        raise KeyError(f"unknown_trade_id: {record.id}")

    def delete_trade(self, trade_id: str) -> None:
        rows = self.list_trades()
        remaining = [row for row in rows if row.id != trade_id]
        if len(remaining) == len(rows):
            raise KeyError(f"unknown_trade_id: {trade_id}")
        self._rewrite(remaining)

    def _rewrite(self, rows: list[TradeRecord]) -> None:
        text = "".join(row.model_dump_json() + "\n" for row in rows)
        self._path.write_text(text, encoding="utf-8")
