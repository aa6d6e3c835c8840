from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from trade_journal.analytics.calendar import (
    day_of_week,
    format_duration,
    session_from_hour,
    session_from_time,
    week_bounds,
)
from trade_journal.errors import InvalidInputError


@pytest.mark.parametrize(
    ("hour", "expected"),
    [
        (21, "London Close"),
        (20, "London Close"),
        (22, "NY Session"),
        (23, "NY Session"),
        (0, "NY Session"),
        (1, "NY Session"),
        (2, "Asian Session"),
        (10, "Asian Session"),
        (19, "Asian Session"),
    ],
)
def test_session_from_hour(hour: int, expected: str) -> None:
    assert session_from_hour(hour) == expected


@pytest.mark.parametrize("bad", [24, -1, "21", 21.0, True])
def test_session_from_hour_rejects_invalid(bad: object) -> None:
    with pytest.raises(InvalidInputError):
        session_from_hour(bad)  # type: ignore[arg-type]


def test_session_from_time() -> None:
    assert session_from_time("21:45") == "London Close"
    assert session_from_time(time(1, 5)) == "NY Session"


def test_format_duration_is_symmetric() -> None:
    assert format_duration("09:00", "11:30") == "2h 30m"
    assert format_duration("11:30", "09:00") == "2h 30m"


def test_format_duration_minutes_only() -> None:
    assert format_duration("09:00", "09:45") == "45m"
    assert format_duration("09:00", "09:00") == "0m"
    assert format_duration("09:00:30", "09:01:00") == "0m"


def test_format_duration_does_not_cross_midnight() -> None:
    assert format_duration("23:30", "00:15") == "23h 15m"


def test_format_duration_rejects_malformed_time() -> None:
    with pytest.raises(InvalidInputError):
        format_duration("9am", "11:30")


def test_day_of_week() -> None:
    assert day_of_week("2024-01-01") == "Monday"
    assert day_of_week(date(2024, 3, 15)) == "Friday"
    assert day_of_week("2024-01-01T10:00:00Z") == "Monday"
    assert day_of_week("2024-01-01T23:30:00-05:00") == "Tuesday"
    assert day_of_week(datetime(2024, 1, 7, 12, tzinfo=timezone.utc)) == "Sunday"


def test_day_of_week_rejects_malformed_date() -> None:
    with pytest.raises(InvalidInputError):
        day_of_week("01/02/2024")


def test_week_bounds_start_on_sunday() -> None:
    assert week_bounds(date(2024, 1, 3)) == (date(2023, 12, 31), date(2024, 1, 6))
    assert week_bounds("2023-12-31") == (date(2023, 12, 31), date(2024, 1, 6))
    assert week_bounds("2024-01-06") == (date(2023, 12, 31), date(2024, 1, 6))
