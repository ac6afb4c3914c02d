"""Pydantic schemas for time window and group documents.

Membership providers that read raw documents with camelCase keys use these
schemas to turn them into domain entities without ever failing an evaluation: a
window document that does not validate becomes a malformed window, which
counts as an active window but never matches.
"""

from typing import Any, Iterable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from promptgate.core.logging import get_logger
from promptgate.domain.entities import AccessDecision, Group, TimeWindow

logger = get_logger(__name__)


def _coerce_id(v: Any) -> str | None:
    return None if v is None else str(v)


class TimeWindowSchema(BaseModel):
    """Schema for a time window document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(None, validation_alias=AliasChoices("id", "_id"))
    name: str | None = Field("", description="Display label")
    type: str = Field(
        ...,
        validation_alias=AliasChoices("type", "windowType", "window_type"),
        description="daily, weekly, date_range or exception",
    )
    start_time: str | None = Field(None, validation_alias=AliasChoices("startTime", "start_time"))
    end_time: str | None = Field(None, validation_alias=AliasChoices("endTime", "end_time"))
    days_of_week: list[int] | None = Field(
        None,
        validation_alias=AliasChoices("daysOfWeek", "days_of_week"),
        description="0 = Sunday ... 6 = Saturday",
    )
    start_date: str | None = Field(None, validation_alias=AliasChoices("startDate", "start_date"))
    end_date: str | None = Field(None, validation_alias=AliasChoices("endDate", "end_date"))
    timezone: str | None = None
    is_active: bool = Field(True, validation_alias=AliasChoices("isActive", "is_active"))

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        return _coerce_id(v)

    def to_entity(self) -> TimeWindow:
        return TimeWindow(
            window_type=self.type,
            id=self.id,
            name=self.name or "",
            start_time=self.start_time,
            end_time=self.end_time,
            days_of_week=tuple(self.days_of_week) if self.days_of_week is not None else None,
            start_date=self.start_date,
            end_date=self.end_date,
            timezone=self.timezone,
            is_active=self.is_active,
        )


class GroupSchema(BaseModel):
    """Schema for a group document as returned by a membership provider."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str | None = ""
    description: str | None = None
    time_windows: list[Any] | None = Field(
        None, validation_alias=AliasChoices("timeWindows", "time_windows")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        return _coerce_id(v)

    def to_entity(self) -> Group:
        windows = tuple(parse_time_window(w) for w in self.time_windows or ())
        return Group(
            id=self.id,
            name=self.name or "",
            description=self.description,
            time_windows=tuple(w for w in windows if w is not None),
        )


class TimeWindowRestrictionDetails(BaseModel):
    """Machine-readable part of a time window denial."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = "OUTSIDE_TIME_WINDOW"
    can_retry_at: str | None = Field(None, serialization_alias="canRetryAt")


class TimeWindowRestrictionResponse(BaseModel):
    """Body returned with a 403 when a request falls outside the allowed windows."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = "Time Window Restriction"
    message: str
    type: str = "time_window_restriction"
    next_allowed_time: str | None = Field(None, serialization_alias="nextAllowedTime")
    details: TimeWindowRestrictionDetails

    @classmethod
    def from_decision(cls, decision: AccessDecision) -> "TimeWindowRestrictionResponse":
        next_allowed_time = decision.next_allowed_time_iso
        return cls(
            message=decision.message or "You are currently outside your allowed time windows.",
            next_allowed_time=next_allowed_time,
            details=TimeWindowRestrictionDetails(can_retry_at=next_allowed_time),
        )


def parse_time_window(raw: Any) -> TimeWindow | None:
    """Convert a window document into a TimeWindow.

    Args:
        raw: A TimeWindow or a mapping.

    Returns:
        The window; a malformed window when the document does not validate;
        None when ``raw`` is not a window document at all.
    """
    if isinstance(raw, TimeWindow):
        return raw
    if not isinstance(raw, dict):
        logger.warning("Skipping time window that is not a document", value_type=type(raw).__name__)
        return None
    try:
        return TimeWindowSchema.model_validate(raw).to_entity()
    except ValidationError as e:
        window_type = raw.get("type", raw.get("windowType"))
        is_active = raw.get("isActive", raw.get("is_active", True))
        logger.debug(
            "Time window document failed validation",
            window_id=raw.get("id", raw.get("_id")),
            errors=e.error_count(),
        )
        return TimeWindow(
            window_type=str(window_type) if window_type is not None else "",
            id=_coerce_id(raw.get("id", raw.get("_id"))),
            is_active=is_active is not False,
        )


def parse_group(raw: Any) -> Group | None:
    """Convert a group document into a Group, or None if it is unusable."""
    if isinstance(raw, Group):
        return raw
    if not isinstance(raw, dict):
        logger.warning("Skipping group that is not a document", value_type=type(raw).__name__)
        return None
    try:
        return GroupSchema.model_validate(raw).to_entity()
    except ValidationError as e:
        logger.warning("Skipping invalid group document", errors=e.error_count())
        return None


def normalize_groups(raw_groups: Iterable[Any] | None) -> list[Group]:
    """Normalize raw group documents into Group entities, skipping invalid ones."""
    groups = []
    for raw in raw_groups or ():
        group = parse_group(raw)
        if group is not None:
            groups.append(group)
    return groups
