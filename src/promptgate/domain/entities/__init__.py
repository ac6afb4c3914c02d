"""Domain entities for PromptGate.

Entities are frozen dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from promptgate.domain.entities.access import (
    NO_GROUPS_MESSAGE,
    OUTSIDE_WINDOWS_MESSAGE,
    AccessDecision,
    AccessPolicy,
    GroupAccess,
    format_instant,
)
from promptgate.domain.entities.group import Group
from promptgate.domain.entities.time_window import (
    ExceptionWindow,
    RegularWindow,
    TimeWindow,
    WindowType,
    partition_windows,
)

__all__ = [
    "AccessDecision",
    "AccessPolicy",
    "ExceptionWindow",
    "Group",
    "GroupAccess",
    "NO_GROUPS_MESSAGE",
    "OUTSIDE_WINDOWS_MESSAGE",
    "RegularWindow",
    "TimeWindow",
    "WindowType",
    "format_instant",
    "partition_windows",
]
