"""SQLAlchemy model for the users_groups junction table.

Users are owned by the identity service, so user_id is not a foreign key.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from promptgate.infrastructure.persistence.database import Base


class UsersGroupsModel(Base):
    """Junction table between users and groups.

    Attributes:
        user_id: External user identifier.
        group_id: Foreign key to groups table.
    """

    __tablename__ = "users_groups"

    user_id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="External user ID",
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Foreign key to groups table",
    )

    def __repr__(self) -> str:
        return f"<UsersGroups(user_id={self.user_id}, group_id={self.group_id})>"
