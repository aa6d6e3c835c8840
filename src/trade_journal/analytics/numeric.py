"""Numeric helpers shared by the analytics layers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from trade_journal.errors import InvalidInputError

# Wide enough for any finite float at any supported precision.
_CONTEXT = Context(prec=400)


def round_fixed(value: float, places: int) -> float:
    """Round to a fixed number of decimal places, halves away from zero.

    Works on the exact binary value of ``value`` so results agree with
    fixed-point string formatting rather than banker's rounding.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT)
    # Collapse negative zero.
    return float(rounded) + 0.0


def require_finite(field: str, value: object) -> float:
    """Return ``value`` as a float, rejecting non-numeric and non-finite input."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(field, value, "must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(field, value, "must be finite")
    return number


def optional_finite(field: str, value: object | None) -> float | None:
    """Like :func:`require_finite` but passes ``None`` through."""
    if value is None:
        return None
    return require_finite(field, value)
