"""Time window definition validation.

Checks window documents before they are stored. Evaluation never depends on
this validator: the window matcher tolerates malformed windows on its own.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from promptgate.domain.entities.time_window import WindowType

CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

SCHEDULE_TYPES = frozenset({WindowType.DAILY.value, WindowType.WEEKLY.value})
DATED_TYPES = frozenset({WindowType.DATE_RANGE.value, WindowType.EXCEPTION.value})


@dataclass
class WindowValidationError:
    """A single time window validation error."""

    field: str
    message: str
    code: str


class WindowValidator:
    """Validator for time window documents.

    Accepts camelCase keys as produced by the API (startTime, daysOfWeek, ...)
    and ``windowType`` as an alias of ``type``.
    """

    MAX_NAME_LENGTH = 100

    @classmethod
    def validate(cls, data: dict[str, Any]) -> list[WindowValidationError]:
        """Validate a time window document.

        Args:
            data: The window document.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = cls.validate_name(data.get("name"))

        window_type = data.get("type", data.get("windowType"))
        if not window_type:
            errors.append(
                WindowValidationError(
                    field="type",
                    message="Window type is required",
                    code="type_required",
                )
            )
            return errors

        if window_type not in {t.value for t in WindowType}:
            errors.append(
                WindowValidationError(
                    field="type",
                    message=f"Invalid window type '{window_type}'. Valid types: {', '.join(t.value for t in WindowType)}",
                    code="type_invalid",
                )
            )
            return errors

        if window_type in SCHEDULE_TYPES:
            errors.extend(cls.validate_times(data.get("startTime"), data.get("endTime")))
        if window_type == WindowType.WEEKLY.value:
            errors.extend(cls.validate_days(data.get("daysOfWeek")))
        if window_type in DATED_TYPES:
            errors.extend(cls.validate_dates(data.get("startDate"), data.get("endDate")))

        errors.extend(cls.validate_timezone(data.get("timezone")))
        return errors

    @classmethod
    def validate_name(cls, name: Any) -> list[WindowValidationError]:
        if not name:
            return [
                WindowValidationError(
                    field="name",
                    message="Time window name is required",
                    code="name_required",
                )
            ]
        if not isinstance(name, str) or len(name) > cls.MAX_NAME_LENGTH:
            return [
                WindowValidationError(
                    field="name",
                    message=f"Time window name must be a string of at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_invalid",
                )
            ]
        return []

    @classmethod
    def validate_times(cls, start_time: Any, end_time: Any) -> list[WindowValidationError]:
        """Validate the HH:MM start and end times of daily/weekly windows."""
        errors = []

        if not start_time or not end_time:
            errors.append(
                WindowValidationError(
                    field="startTime" if not start_time else "endTime",
                    message="Start time and end time are required for daily/weekly windows",
                    code="times_required",
                )
            )
            return errors

        for field, value in (("startTime", start_time), ("endTime", end_time)):
            if not isinstance(value, str) or not CLOCK_PATTERN.match(value):
                errors.append(
                    WindowValidationError(
                        field=field,
                        message=f"{field} must be in HH:MM format (24-hour)",
                        code="time_invalid_format",
                    )
                )

        if not errors and start_time == end_time:
            errors.append(
                WindowValidationError(
                    field="endTime",
                    message="Start time and end time must differ",
                    code="times_equal",
                )
            )

        return errors

    @classmethod
    def validate_days(cls, days: Any) -> list[WindowValidationError]:
        """Validate the days of week of a weekly window (0 = Sunday)."""
        if not days or not isinstance(days, list):
            return [
                WindowValidationError(
                    field="daysOfWeek",
                    message="Days of week are required for weekly windows",
                    code="days_required",
                )
            ]

        invalid = [
            d for d in days
            if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6
        ]
        if invalid:
            return [
                WindowValidationError(
                    field="daysOfWeek",
                    message=f"Days of week must be integers between 0 (Sunday) and 6 (Saturday), got {invalid}",
                    code="days_invalid",
                )
            ]
        return []

    @classmethod
    def validate_dates(cls, start_date: Any, end_date: Any) -> list[WindowValidationError]:
        """Validate the inclusive date range of date_range/exception windows."""
        if not start_date or not end_date:
            return [
                WindowValidationError(
                    field="startDate" if not start_date else "endDate",
                    message="Start date and end date are required for date range windows",
                    code="dates_required",
                )
            ]

        parsed = {}
        errors = []
        for field, value in (("startDate", start_date), ("endDate", end_date)):
            try:
                if not isinstance(value, str) or not DATE_PATTERN.match(value):
                    raise ValueError(value)
                parsed[field] = date.fromisoformat(value)
            except ValueError:
                errors.append(
                    WindowValidationError(
                        field=field,
                        message=f"{field} must be a valid date in YYYY-MM-DD format",
                        code="date_invalid_format",
                    )
                )

        if not errors and parsed["startDate"] > parsed["endDate"]:
            errors.append(
                WindowValidationError(
                    field="endDate",
                    message="End date must not be before start date",
                    code="date_range_inverted",
                )
            )
        return errors

    @classmethod
    def validate_timezone(cls, tz_name: Any) -> list[WindowValidationError]:
        if tz_name is None or tz_name == "":
            return []
        try:
            ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError, TypeError):
            return [
                WindowValidationError(
                    field="timezone",
                    message=f"Unknown timezone '{tz_name}'",
                    code="timezone_invalid",
                )
            ]
        return []
