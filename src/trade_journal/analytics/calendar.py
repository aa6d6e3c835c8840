"""Clock and calendar classification helpers for journal entries."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from trade_journal.errors import InvalidInputError
from trade_journal.types import SessionLabel

_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_CLOCK_FORMATS = ("%H:%M", "%H:%M:%S")


def session_from_hour(hour: int) -> SessionLabel:
    """Bucket an hour of day into a trading session.

    [20, 22) is London Close, [22, 24) and [0, 2) are NY Session and the
    rest is Asian Session. The hour is used as given, without timezone
    conversion.
    """
    if isinstance(hour, bool) or not isinstance(hour, int):
        raise InvalidInputError("hour", hour, "must be an integer")
    if not 0 <= hour <= 23:
        raise InvalidInputError("hour", hour, "must be within 0-23")
    if 20 <= hour < 22:
        return "London Close"
    if hour >= 22 or hour < 2:
        return "NY Session"
    return "Asian Session"


def session_from_time(clock: str | time) -> SessionLabel:
    """Session bucket for an ``HH:MM`` time of day."""
    return session_from_hour(parse_clock(clock).hour)


def format_duration(start_time: str | time, end_time: str | time) -> str:
    """Elapsed time between two same-day clock values, e.g. ``2h 30m``.

    The magnitude is used when end precedes start; a trade that crosses
    midnight is therefore reported as the same-day distance.
    """
    start = _seconds_of_day(parse_clock(start_time))
    end = _seconds_of_day(parse_clock(end_time))
    elapsed = abs(end - start)
    hours, remainder = divmod(elapsed, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def day_of_week(value: str | date) -> str:
    """Weekday name of a calendar date, evaluated in UTC."""
    return _WEEKDAY_NAMES[_as_utc_date(value).weekday()]


def week_bounds(value: str | date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing ``value``."""
    day = _as_utc_date(value)
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def parse_clock(value: str | time) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a time of day."""
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        text = value.strip()
        for fmt in _CLOCK_FORMATS:
            try:
                return datetime.strptime(text, fmt).time()
            except ValueError:
                continue
    raise InvalidInputError("time", value, "expected HH:MM or HH:MM:SS")


def _seconds_of_day(clock: time) -> int:
    return clock.hour * 3600 + clock.minute * 60 + clock.second


def _as_utc_date(value: str | date) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidInputError("date", value, "expected an ISO-8601 date") from exc
        return _as_utc_date(parsed)
    raise InvalidInputError("date", value, "expected a date or ISO-8601 string")
