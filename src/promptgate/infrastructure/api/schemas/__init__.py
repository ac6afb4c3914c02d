"""Pydantic schemas for PromptGate documents and responses."""

from promptgate.infrastructure.api.schemas.time_window_schemas import (
    GroupSchema,
    TimeWindowRestrictionDetails,
    TimeWindowRestrictionResponse,
    TimeWindowSchema,
    normalize_groups,
    parse_group,
    parse_time_window,
)

__all__ = [
    "GroupSchema",
    "TimeWindowRestrictionDetails",
    "TimeWindowRestrictionResponse",
    "TimeWindowSchema",
    "normalize_groups",
    "parse_group",
    "parse_time_window",
]
