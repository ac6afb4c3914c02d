"""SQLAlchemy model for the groups table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from promptgate.infrastructure.persistence.database import Base


class GroupModel(Base):
    """SQLAlchemy model for the groups table.

    Attributes:
        id: Primary key (UUID string).
        name: Group name.
        description: Optional description.
        is_active: Inactive groups are not returned to the evaluator.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Group ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Group name",
    )
    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Description of the group's purpose",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    time_windows: Mapped[list["TimeWindowModel"]] = relationship(  # noqa: F821
        "TimeWindowModel",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="TimeWindowModel.id",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name})>"
