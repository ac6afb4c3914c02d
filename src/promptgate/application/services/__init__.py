"""Application services for PromptGate."""

from promptgate.application.services.membership_provider import GroupMembershipProvider
from promptgate.application.services.time_window_access_service import (
    TimeWindowAccessService,
    check_time_window_access,
    resolve_now,
)

__all__ = [
    "GroupMembershipProvider",
    "TimeWindowAccessService",
    "check_time_window_access",
    "resolve_now",
]
