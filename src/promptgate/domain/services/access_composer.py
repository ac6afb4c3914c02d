"""Access decision composition across a user's groups.

Groups are combined with OR logic: one permissive group overrides any number
of restrictive ones. When every group denies, the earliest resume instant
across the denying groups is reported.
"""

from datetime import datetime, timezone
from typing import Iterable

from promptgate.core.logging import get_logger
from promptgate.domain.entities.access import (
    NO_GROUPS_MESSAGE,
    OUTSIDE_WINDOWS_MESSAGE,
    RETRY_AT_MESSAGE,
    AccessDecision,
    AccessPolicy,
    format_instant,
)
from promptgate.domain.entities.group import Group
from promptgate.domain.services.group_evaluator import GroupEvaluator

logger = get_logger(__name__)


def compose_access_decision(
    groups: Iterable[Group] | None,
    now: datetime,
    policy: AccessPolicy | None = None,
) -> AccessDecision:
    """Decide access for a user from the groups they belong to.

    Args:
        groups: The user's groups; None or empty means no membership.
        now: Evaluation instant, shared by every group and window.
        policy: Access policy; defaults to AccessPolicy().

    Returns:
        AccessDecision for the user at ``now``.
    """
    policy = policy or AccessPolicy()
    groups = list(groups or ())

    if not groups:
        if policy.default_allow_when_no_groups:
            return AccessDecision.allow()
        return AccessDecision.deny(NO_GROUPS_MESSAGE)

    evaluator = GroupEvaluator(policy)
    candidates: list[datetime] = []

    for group in groups:
        outcome = evaluator.evaluate(group, now)
        if outcome.allowed:
            logger.debug("Access granted by group", group_id=group.id, group_name=group.name)
            return AccessDecision.allow()
        if outcome.next_allowed_time is not None:
            candidates.append(outcome.next_allowed_time)

    if not candidates:
        return AccessDecision.deny(OUTSIDE_WINDOWS_MESSAGE)

    next_allowed_time = min(candidates).astimezone(timezone.utc)
    return AccessDecision.deny(
        RETRY_AT_MESSAGE.format(instant=format_instant(next_allowed_time)),
        next_allowed_time=next_allowed_time,
    )
