"""Repository that resolves a user's groups and their time windows."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from promptgate.core.logging import get_logger
from promptgate.domain.entities import Group, TimeWindow
from promptgate.infrastructure.persistence.models import (
    GroupModel,
    TimeWindowModel,
    UsersGroupsModel,
)

logger = get_logger(__name__)


def parse_days_of_week(value: str | None) -> tuple[int, ...] | None:
    """Decode the stored comma-separated weekday list.

    Non-numeric entries are kept out; the matcher then sees an empty or
    partial set and treats the window accordingly.
    """
    if value is None:
        return None
    return tuple(int(part) for part in value.split(",") if part.strip().lstrip("-").isdigit())


def format_days_of_week(days: list[int] | tuple[int, ...] | None) -> str | None:
    """Encode weekdays for storage."""
    if days is None:
        return None
    return ",".join(str(d) for d in days)


def to_time_window(model: TimeWindowModel) -> TimeWindow:
    return TimeWindow(
        window_type=model.window_type,
        id=model.id,
        name=model.name or "",
        start_time=model.start_time,
        end_time=model.end_time,
        days_of_week=parse_days_of_week(model.days_of_week),
        start_date=model.start_date,
        end_date=model.end_date,
        timezone=model.timezone,
        is_active=model.is_active,
    )


def to_group(model: GroupModel) -> Group:
    return Group(
        id=model.id,
        name=model.name,
        description=model.description,
        time_windows=tuple(to_time_window(w) for w in model.time_windows),
    )


class GroupMembershipRepository:
    """Read-only membership provider backed by the database."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_user_groups(self, user_id: str) -> list[Group]:
        """Get the active groups of a user, with their time windows.

        Args:
            user_id: User ID.

        Returns:
            List of groups ordered by name (empty if the user has none).
        """
        result = await self.session.execute(
            select(GroupModel)
            .join(UsersGroupsModel, UsersGroupsModel.group_id == GroupModel.id)
            .where(UsersGroupsModel.user_id == user_id)
            .where(GroupModel.is_active.is_(True))
            .options(selectinload(GroupModel.time_windows))
            .order_by(GroupModel.name)
        )
        groups = [to_group(model) for model in result.scalars().all()]
        logger.debug("Loaded user groups", user_id=user_id, group_count=len(groups))
        return groups
