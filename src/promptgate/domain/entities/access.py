"""Access policy and decision value objects."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

NO_GROUPS_MESSAGE = "Access denied. You must be assigned to a group to send prompts."
OUTSIDE_WINDOWS_MESSAGE = "Access denied. You are currently outside your allowed time windows."
RETRY_AT_MESSAGE = "Access denied. You can send prompts again at {instant}."


def format_instant(instant: datetime) -> str:
    """Render an instant as ISO-8601 UTC with milliseconds, e.g. 2024-01-15T09:00:00.000Z."""
    utc = instant.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class AccessPolicy:
    """Defaults applied when a user or group has nothing to evaluate.

    Attributes:
        default_allow_when_no_groups: Decision for users with no groups.
        default_allow_when_no_time_windows: Decision for a group with no active windows.
        honor_window_timezones: Evaluate windows in their own timezone instead of UTC.
    """

    default_allow_when_no_groups: bool = False
    default_allow_when_no_time_windows: bool = True
    honor_window_timezones: bool = False

    @classmethod
    def from_settings(cls, settings: Any) -> "AccessPolicy":
        return cls(
            default_allow_when_no_groups=settings.default_allow_when_no_groups,
            default_allow_when_no_time_windows=settings.default_allow_when_no_time_windows,
            honor_window_timezones=settings.honor_window_timezones,
        )


@dataclass(frozen=True)
class GroupAccess:
    """Outcome of evaluating a single group."""

    allowed: bool
    next_allowed_time: datetime | None = None


@dataclass(frozen=True)
class AccessDecision:
    """Final access decision for a user at an instant.

    Attributes:
        is_allowed: Whether the action is permitted.
        message: Explanation, present when denied.
        next_allowed_time: Earliest instant access resumes; None when allowed
            or when no future admission can be computed.
    """

    is_allowed: bool
    message: str | None = None
    next_allowed_time: datetime | None = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(is_allowed=True)

    @classmethod
    def deny(cls, message: str, next_allowed_time: datetime | None = None) -> "AccessDecision":
        return cls(is_allowed=False, message=message, next_allowed_time=next_allowed_time)

    @property
    def next_allowed_time_iso(self) -> str | None:
        if self.next_allowed_time is None:
            return None
        return format_instant(self.next_allowed_time)

    def to_dict(self) -> dict[str, Any]:
        """Render the decision in its wire shape (camelCase keys)."""
        if self.is_allowed:
            return {"isAllowed": True}
        return {
            "isAllowed": False,
            "message": self.message,
            "nextAllowedTime": self.next_allowed_time_iso,
        }
