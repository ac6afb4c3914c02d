"""Unit tests for window matching."""

from datetime import datetime, timezone

import pytest

from promptgate.domain.entities import ExceptionWindow, TimeWindow
from promptgate.domain.services.window_matcher import (
    exception_blocks,
    exception_end,
    next_window_start,
    weekday_of,
    window_matches,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def daily(start="09:00", end="17:00", **kwargs) -> TimeWindow:
    return TimeWindow(window_type="daily", start_time=start, end_time=end, **kwargs)


def weekly(days=(1, 2, 3, 4, 5), start="09:00", end="17:00", **kwargs) -> TimeWindow:
    return TimeWindow(
        window_type="weekly", start_time=start, end_time=end, days_of_week=days, **kwargs
    )


def date_range(start="2024-01-10", end="2024-01-20") -> TimeWindow:
    return TimeWindow(window_type="date_range", start_date=start, end_date=end)


def test_weekday_of_uses_sunday_as_zero():
    """2024-01-14 is a Sunday and 2024-01-15 a Monday."""
    assert weekday_of(utc(2024, 1, 14).date()) == 0
    assert weekday_of(utc(2024, 1, 15).date()) == 1
    assert weekday_of(utc(2024, 1, 13).date()) == 6


@pytest.mark.parametrize(
    "now,expected",
    [
        (utc(2024, 1, 15, 9, 0), True),
        (utc(2024, 1, 15, 12, 30), True),
        (utc(2024, 1, 15, 16, 59, 59), True),
        (utc(2024, 1, 15, 17, 0), False),
        (utc(2024, 1, 15, 8, 59, 59), False),
    ],
)
def test_daily_window_is_half_open(now, expected):
    """Start is inclusive, end is exclusive."""
    assert window_matches(daily(), now) is expected


@pytest.mark.parametrize(
    "now,expected",
    [
        (utc(2024, 1, 15, 23, 0), True),
        (utc(2024, 1, 15, 5, 0), True),
        (utc(2024, 1, 15, 22, 0), True),
        (utc(2024, 1, 15, 6, 0), False),
        (utc(2024, 1, 15, 10, 0), False),
    ],
)
def test_daily_window_crossing_midnight(now, expected):
    assert window_matches(daily("22:00", "06:00"), now) is expected


def test_daily_next_start_later_today():
    assert next_window_start(daily(), utc(2024, 1, 15, 8, 0)) == utc(2024, 1, 15, 9, 0)


def test_daily_next_start_tomorrow_after_end():
    assert next_window_start(daily(), utc(2024, 1, 15, 18, 0)) == utc(2024, 1, 16, 9, 0)


def test_daily_next_start_crossing_midnight():
    window = daily("22:00", "06:00")
    assert next_window_start(window, utc(2024, 1, 15, 10, 0)) == utc(2024, 1, 15, 22, 0)


def test_next_start_is_none_while_matching():
    assert next_window_start(daily(), utc(2024, 1, 15, 10, 0)) is None


def test_naive_instant_is_read_as_utc():
    assert window_matches(daily(), datetime(2024, 1, 15, 10, 0)) is True
    assert next_window_start(daily(), datetime(2024, 1, 15, 8, 0)) == utc(2024, 1, 15, 9, 0)


def test_weekly_window_excludes_weekend_even_within_hours():
    window = weekly()
    assert window_matches(window, utc(2024, 1, 14, 10, 0)) is False  # Sunday
    assert window_matches(window, utc(2024, 1, 13, 10, 0)) is False  # Saturday
    assert window_matches(window, utc(2024, 1, 15, 10, 0)) is True  # Monday


def test_weekly_next_start_from_saturday_is_monday():
    assert next_window_start(weekly(), utc(2024, 1, 13, 10, 0)) == utc(2024, 1, 15, 9, 0)


def test_weekly_next_start_from_friday_evening_is_monday():
    assert next_window_start(weekly(), utc(2024, 1, 12, 18, 0)) == utc(2024, 1, 15, 9, 0)


def test_weekly_next_start_same_day_when_start_ahead():
    assert next_window_start(weekly(), utc(2024, 1, 15, 8, 0)) == utc(2024, 1, 15, 9, 0)


def test_weekly_single_day_wraps_to_next_week():
    window = weekly(days=(1,))
    assert next_window_start(window, utc(2024, 1, 15, 18, 0)) == utc(2024, 1, 22, 9, 0)


def test_weekly_crossing_midnight_uses_start_day_only():
    """Friday 22:00-02:00 does not admit Saturday 01:00."""
    window = weekly(days=(5,), start="22:00", end="02:00")
    assert window_matches(window, utc(2024, 1, 12, 23, 0)) is True
    assert window_matches(window, utc(2024, 1, 13, 1, 0)) is False


def test_date_range_bounds_are_inclusive():
    window = date_range()
    assert window_matches(window, utc(2024, 1, 10, 0, 0)) is True
    assert window_matches(window, utc(2024, 1, 20, 23, 59)) is True
    assert window_matches(window, utc(2024, 1, 21, 0, 0)) is False
    assert window_matches(window, utc(2024, 1, 9, 23, 59)) is False


def test_date_range_next_start():
    window = date_range()
    assert next_window_start(window, utc(2024, 1, 1, 12, 0)) == utc(2024, 1, 10)
    assert next_window_start(window, utc(2024, 1, 15, 12, 0)) is None
    assert next_window_start(window, utc(2024, 2, 1, 12, 0)) is None


def test_exception_never_grants_access():
    window = TimeWindow(window_type="exception", start_date="2024-01-15", end_date="2024-01-15")
    now = utc(2024, 1, 15, 12, 0)
    assert window_matches(window, now) is False
    assert next_window_start(window, utc(2024, 1, 1)) is None


def test_exception_blocks_and_ends():
    exception = ExceptionWindow(
        TimeWindow(window_type="exception", start_date="2024-01-15", end_date="2024-01-16")
    )
    assert exception_blocks(exception, utc(2024, 1, 15, 0, 0)) is True
    assert exception_blocks(exception, utc(2024, 1, 16, 23, 59)) is True
    assert exception_blocks(exception, utc(2024, 1, 17, 0, 0)) is False
    assert exception_end(exception) == utc(2024, 1, 17)


@pytest.mark.parametrize(
    "window",
    [
        TimeWindow(window_type="daily", start_time="09:00"),
        TimeWindow(window_type="daily", start_time="25:00", end_time="26:00"),
        TimeWindow(window_type="daily", start_time="nine", end_time="17:00"),
        TimeWindow(window_type="daily", start_time="09:00", end_time="09:00"),
        TimeWindow(window_type="weekly", start_time="09:00", end_time="17:00", days_of_week=()),
        TimeWindow(window_type="weekly", start_time="09:00", end_time="17:00", days_of_week=(7,)),
        TimeWindow(window_type="weekly", start_time="09:00", end_time="17:00"),
        TimeWindow(window_type="date_range", start_date="2024-01-10"),
        TimeWindow(window_type="date_range", start_date="2024-02-10", end_date="2024-01-10"),
        TimeWindow(window_type="date_range", start_date="tomorrow", end_date="2024-01-10"),
        TimeWindow(window_type="hourly", start_time="09:00", end_time="17:00"),
    ],
)
def test_malformed_window_never_matches_nor_yields_next_start(window):
    for now in (utc(2024, 1, 1, 0, 0), utc(2024, 1, 15, 12, 0), utc(2024, 1, 15, 23, 0)):
        assert window_matches(window, now) is False
        assert next_window_start(window, now) is None


def test_malformed_exception_does_not_block():
    exception = ExceptionWindow(TimeWindow(window_type="exception", start_date="2024-01-15"))
    assert exception_blocks(exception, utc(2024, 1, 15, 12, 0)) is False
    assert exception_end(exception) is None


def test_timezone_is_ignored_on_canonical_clock():
    window = daily(timezone="America/New_York")
    # 15:00 in New York, 20:00 UTC
    assert window_matches(window, utc(2024, 1, 15, 20, 0)) is False
    assert window_matches(window, utc(2024, 1, 15, 10, 0)) is True


def test_timezone_is_honored_when_enabled():
    window = daily(timezone="America/New_York")
    assert window_matches(window, utc(2024, 1, 15, 20, 0), honor_timezone=True) is True

    # 18:00 in New York: next start is 09:00 New York the following day
    next_start = next_window_start(window, utc(2024, 1, 15, 23, 0), honor_timezone=True)
    assert next_start == utc(2024, 1, 16, 14, 0)


def test_unknown_timezone_is_malformed_only_when_honored():
    window = daily(timezone="Mars/Olympus_Mons")
    now = utc(2024, 1, 15, 10, 0)
    assert window_matches(window, now) is True
    assert window_matches(window, now, honor_timezone=True) is False
