"""SQLAlchemy model for the time_windows table.

Each row is one access rule attached to a group. Clock times and dates are
stored as the strings they were entered as; days of week are stored as a
comma-separated list ("1,2,3,4,5").
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from promptgate.infrastructure.persistence.database import Base


class TimeWindowModel(Base):
    """SQLAlchemy model for the time_windows table."""

    __tablename__ = "time_windows"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Time window ID (UUID)",
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to groups table",
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    window_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="daily, weekly, date_range or exception",
    )
    start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    days_of_week: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Comma-separated weekdays, 0 = Sunday",
    )
    start_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    group: Mapped["GroupModel"] = relationship(  # noqa: F821
        "GroupModel",
        back_populates="time_windows",
    )

    def __repr__(self) -> str:
        return f"<TimeWindow(id={self.id}, type={self.window_type}, group_id={self.group_id})>"
