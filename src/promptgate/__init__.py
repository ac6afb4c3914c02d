"""PromptGate - time window access control.

Decides whether a user may send prompts at a given instant from the
daily, weekly, date range and exception windows of the groups they belong to.
"""

__version__ = "0.1.0"

from promptgate.application.services import TimeWindowAccessService, check_time_window_access
from promptgate.domain.entities import AccessDecision, AccessPolicy, Group, TimeWindow

__all__ = [
    "AccessDecision",
    "AccessPolicy",
    "Group",
    "TimeWindow",
    "TimeWindowAccessService",
    "__version__",
    "check_time_window_access",
]
