"""SQLAlchemy models for PromptGate tables.

All models inherit from the Base class defined in database.py.
"""

from promptgate.infrastructure.persistence.models.group import GroupModel
from promptgate.infrastructure.persistence.models.time_window import TimeWindowModel
from promptgate.infrastructure.persistence.models.users_groups import UsersGroupsModel

__all__ = [
    "GroupModel",
    "TimeWindowModel",
    "UsersGroupsModel",
]
