"""Membership provider interface.

A membership provider returns the groups (with their time windows) that a
user belongs to, as Group entities. Providers that read raw documents
normalize them before returning, and may raise on infrastructure failure.
"""

from typing import Protocol

from promptgate.domain.entities import Group


class GroupMembershipProvider(Protocol):
    """Protocol for anything that can list a user's groups."""

    async def get_user_groups(self, user_id: str) -> list[Group] | None:
        ...
