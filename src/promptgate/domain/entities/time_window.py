"""Time window entities.

A time window is a single access rule attached to a group. Regular windows
grant access while they match; exception windows block access for a span of
dates and take precedence over every regular window of the same group.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class WindowType(str, Enum):
    """Supported time window types."""

    DAILY = "daily"
    WEEKLY = "weekly"
    DATE_RANGE = "date_range"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class TimeWindow:
    """A single time-based access rule.

    Fields are kept as received (strings for clock times and dates) so that a
    malformed definition can still be represented; parsing happens in the
    window matcher, which treats unparseable windows as non-matching.

    Attributes:
        window_type: One of the WindowType values. Unknown values are malformed.
        id: Optional identifier.
        name: Display label.
        start_time: "HH:MM" start of the daily interval.
        end_time: "HH:MM" end of the daily interval (exclusive).
        days_of_week: Weekdays for weekly windows, 0 = Sunday.
        start_date: "YYYY-MM-DD" first day (inclusive).
        end_date: "YYYY-MM-DD" last day (inclusive).
        timezone: IANA zone name.
        is_active: Inactive windows are ignored entirely.
    """

    window_type: str
    id: str | None = None
    name: str = ""
    start_time: str | None = None
    end_time: str | None = None
    days_of_week: tuple[int, ...] | None = None
    start_date: str | None = None
    end_date: str | None = None
    timezone: str | None = None
    is_active: bool = True

    @property
    def is_exception(self) -> bool:
        return self.window_type == WindowType.EXCEPTION.value


@dataclass(frozen=True)
class RegularWindow:
    """A window that grants access while it matches."""

    window: TimeWindow


@dataclass(frozen=True)
class ExceptionWindow:
    """A window that denies access while its date range contains the instant."""

    window: TimeWindow


def partition_windows(
    windows: Iterable[TimeWindow] | None,
) -> tuple[list[RegularWindow], list[ExceptionWindow]]:
    """Split the active windows of a group into regular and exception windows.

    Args:
        windows: Windows of a group; None is treated as empty.

    Returns:
        Tuple of (regular windows, exception windows), inactive windows dropped.
    """
    regular: list[RegularWindow] = []
    exceptions: list[ExceptionWindow] = []
    for window in windows or ():
        if not window.is_active:
            continue
        if window.is_exception:
            exceptions.append(ExceptionWindow(window))
        else:
            regular.append(RegularWindow(window))
    return regular, exceptions
