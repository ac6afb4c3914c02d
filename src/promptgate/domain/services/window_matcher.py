"""Window matching.

Decides whether a single time window admits access at an instant and, when it
does not, computes the next instant at which it will.

All comparisons use UTC unless timezone mode is enabled and the window names
a zone, in which case the instant is converted into that zone first. A
window that lacks or cannot parse the fields its type requires is malformed:
it never matches and never yields a next start.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from promptgate.core.exceptions import MalformedWindowError
from promptgate.core.logging import get_logger
from promptgate.domain.entities.time_window import ExceptionWindow, TimeWindow, WindowType

logger = get_logger(__name__)

CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class DailyInterval:
    """Time-of-day interval, end exclusive, possibly wrapping past midnight."""

    start: time
    end: time

    @property
    def crosses_midnight(self) -> bool:
        return self.start > self.end

    def contains(self, moment: time) -> bool:
        if self.crosses_midnight:
            return moment >= self.start or moment < self.end
        return self.start <= moment < self.end


def weekday_of(day: date) -> int:
    """Weekday number with 0 = Sunday, 6 = Saturday."""
    return day.isoweekday() % 7


def _parse_clock(value: str | None, field: str, window: TimeWindow) -> time:
    if not isinstance(value, str):
        raise MalformedWindowError(f"{field} is required", window.id)
    match = CLOCK_PATTERN.match(value.strip())
    if match is None:
        raise MalformedWindowError(f"{field} must be HH:MM, got {value!r}", window.id)
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise MalformedWindowError(f"{field} is out of range: {value!r}", window.id)
    return time(hour, minute)


def _parse_date(value: str | None, field: str, window: TimeWindow) -> date:
    if not isinstance(value, str):
        raise MalformedWindowError(f"{field} is required", window.id)
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        raise MalformedWindowError(f"{field} must be YYYY-MM-DD, got {value!r}", window.id)


def daily_interval(window: TimeWindow) -> DailyInterval:
    """Parse the start/end clock times of a daily or weekly window."""
    start = _parse_clock(window.start_time, "start_time", window)
    end = _parse_clock(window.end_time, "end_time", window)
    if start == end:
        raise MalformedWindowError("start_time and end_time are equal", window.id)
    return DailyInterval(start, end)


def days_of_week(window: TimeWindow) -> frozenset[int]:
    """Parse the weekday set of a weekly window."""
    days = window.days_of_week
    if not days:
        raise MalformedWindowError("days_of_week must not be empty", window.id)
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise MalformedWindowError(f"invalid day of week {day!r}", window.id)
    return frozenset(days)


def date_span(window: TimeWindow) -> tuple[date, date]:
    """Parse the inclusive date range of a date_range or exception window."""
    start = _parse_date(window.start_date, "start_date", window)
    end = _parse_date(window.end_date, "end_date", window)
    if start > end:
        raise MalformedWindowError("start_date is after end_date", window.id)
    return start, end


def window_zone(window: TimeWindow, honor_timezone: bool = False) -> tzinfo:
    """Clock the window is evaluated against: UTC, or the window's own zone."""
    if not honor_timezone or not window.timezone:
        return timezone.utc
    try:
        return ZoneInfo(window.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise MalformedWindowError(f"unknown timezone {window.timezone!r}", window.id)


def _local(now: datetime, zone: tzinfo) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone)


def _at(day: date, moment: time, zone: tzinfo) -> datetime:
    return datetime.combine(day, moment, tzinfo=zone)


def _matches(window: TimeWindow, now: datetime, honor_timezone: bool) -> bool:
    local = _local(now, window_zone(window, honor_timezone))
    window_type = window.window_type

    if window_type == WindowType.DAILY.value:
        return daily_interval(window).contains(local.time())

    if window_type == WindowType.WEEKLY.value:
        days = days_of_week(window)
        interval = daily_interval(window)
        # Wrapping weekly windows are matched against the current weekday only
        return weekday_of(local.date()) in days and interval.contains(local.time())

    if window_type == WindowType.DATE_RANGE.value:
        start, end = date_span(window)
        return start <= local.date() <= end

    if window_type == WindowType.EXCEPTION.value:
        # Exceptions only ever block
        return False

    raise MalformedWindowError(f"unknown window type {window_type!r}", window.id)


def _next_start(window: TimeWindow, now: datetime, honor_timezone: bool) -> datetime | None:
    zone = window_zone(window, honor_timezone)
    local = _local(now, zone)
    today = local.date()
    window_type = window.window_type

    if window_type == WindowType.DAILY.value:
        interval = daily_interval(window)
        if interval.contains(local.time()):
            return None
        candidate = _at(today, interval.start, zone)
        if candidate <= local:
            candidate = _at(today + timedelta(days=1), interval.start, zone)
        return candidate

    if window_type == WindowType.WEEKLY.value:
        days = days_of_week(window)
        interval = daily_interval(window)
        if weekday_of(today) in days and interval.contains(local.time()):
            return None
        for offset in range(8):
            day = today + timedelta(days=offset)
            if weekday_of(day) not in days:
                continue
            candidate = _at(day, interval.start, zone)
            if candidate > local:
                return candidate
        return None

    if window_type == WindowType.DATE_RANGE.value:
        start, _ = date_span(window)
        if today < start:
            return _at(start, time(0), zone)
        # Currently matching or exhausted
        return None

    if window_type == WindowType.EXCEPTION.value:
        return None

    raise MalformedWindowError(f"unknown window type {window_type!r}", window.id)


def window_matches(window: TimeWindow, now: datetime, honor_timezone: bool = False) -> bool:
    """Check whether a regular window admits access at ``now``.

    Args:
        window: Window definition.
        now: Evaluation instant (naive values are read as UTC).
        honor_timezone: Evaluate in the window's own timezone.

    Returns:
        True if the window admits access. Malformed windows return False.
    """
    try:
        return _matches(window, now, honor_timezone)
    except MalformedWindowError as e:
        logger.debug("Ignoring malformed time window", window_id=window.id, reason=str(e))
        return False


def next_window_start(
    window: TimeWindow, now: datetime, honor_timezone: bool = False
) -> datetime | None:
    """Compute the next instant after ``now`` at which the window admits access.

    Args:
        window: Window definition.
        now: Evaluation instant (naive values are read as UTC).
        honor_timezone: Evaluate in the window's own timezone.

    Returns:
        The next start instant, or None when the window currently matches, is
        exhausted, is an exception, or is malformed.
    """
    try:
        return _next_start(window, now, honor_timezone)
    except MalformedWindowError as e:
        logger.debug("Ignoring malformed time window", window_id=window.id, reason=str(e))
        return None


def exception_blocks(
    exception: ExceptionWindow, now: datetime, honor_timezone: bool = False
) -> bool:
    """Check whether an exception window's date range contains ``now``."""
    window = exception.window
    try:
        start, end = date_span(window)
        local = _local(now, window_zone(window, honor_timezone))
    except MalformedWindowError as e:
        logger.debug("Ignoring malformed exception window", window_id=window.id, reason=str(e))
        return False
    return start <= local.date() <= end


def exception_end(exception: ExceptionWindow, honor_timezone: bool = False) -> datetime | None:
    """First instant after the exception: the day after end_date at 00:00."""
    window = exception.window
    try:
        _, end = date_span(window)
        zone = window_zone(window, honor_timezone)
    except MalformedWindowError as e:
        logger.debug("Ignoring malformed exception window", window_id=window.id, reason=str(e))
        return None
    return _at(end + timedelta(days=1), time(0), zone)
