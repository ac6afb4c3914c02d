"""Persistence repositories."""

from promptgate.infrastructure.persistence.repositories.group_membership_repository import (
    GroupMembershipRepository,
    format_days_of_week,
    parse_days_of_week,
)

__all__ = [
    "GroupMembershipRepository",
    "format_days_of_week",
    "parse_days_of_week",
]
