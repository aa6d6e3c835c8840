"""Error types raised by the trade journal."""

from __future__ import annotations


class TradeJournalError(Exception):
    """Base trade journal error."""


class InvalidInputError(TradeJournalError, ValueError):
    """Raised when an input falls outside the engine's contract.

    Degenerate but valid inputs (zero risk per unit, no trades, no losses)
    never raise; they map to sentinel return values instead.
    """

    kind = "InvalidInput"

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}: {reason} (got {value!r})")
