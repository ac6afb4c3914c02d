"""Group evaluation.

Reduces the time windows of one group to a single allow/deny outcome and the
earliest instant at which the group admits access again.

Evaluation order:
1. No active windows: the policy default for window-less groups applies.
2. Any active exception window containing the instant denies access,
   whatever the regular windows say.
3. Otherwise access is granted if any regular window matches. A group with
   only exception windows therefore never admits.

When denied, the resume instant is the first candidate at which no exception
blocks and a regular window admits.
"""

from datetime import datetime

from promptgate.core.logging import get_logger
from promptgate.domain.entities.access import AccessPolicy, GroupAccess
from promptgate.domain.entities.group import Group
from promptgate.domain.entities.time_window import (
    ExceptionWindow,
    RegularWindow,
    partition_windows,
)
from promptgate.domain.services.window_matcher import (
    exception_blocks,
    exception_end,
    next_window_start,
    window_matches,
)

logger = get_logger(__name__)

# Upper bound on candidate hops when searching for the resume instant
MAX_RESUME_STEPS = 64


class GroupEvaluator:
    """Evaluates the time windows of a single group."""

    def __init__(self, policy: AccessPolicy | None = None):
        """Initialize the evaluator.

        Args:
            policy: Access policy; defaults to AccessPolicy().
        """
        self.policy = policy or AccessPolicy()

    @property
    def honor_timezone(self) -> bool:
        return self.policy.honor_window_timezones

    def evaluate(self, group: Group, now: datetime) -> GroupAccess:
        """Evaluate a group at ``now``.

        Args:
            group: Group with its time windows.
            now: Evaluation instant.

        Returns:
            GroupAccess with the outcome and, when denied, the resume instant.
        """
        regular, exceptions = partition_windows(group.time_windows)

        if not regular and not exceptions:
            return GroupAccess(allowed=self.policy.default_allow_when_no_time_windows)

        blocking = self._blocking(exceptions, now)
        if blocking:
            resume_from = self._latest_end(blocking)
            logger.debug(
                "Group blocked by exception window",
                group_id=group.id,
                exception_ids=[e.window.id for e in blocking],
            )
            if resume_from is None:
                return GroupAccess(allowed=False)
            return GroupAccess(
                allowed=False,
                next_allowed_time=self._resume_time(regular, exceptions, resume_from),
            )

        if any(window_matches(r.window, now, self.honor_timezone) for r in regular):
            return GroupAccess(allowed=True)

        candidate = self._earliest_start(regular, now)
        if candidate is None:
            return GroupAccess(allowed=False)
        return GroupAccess(
            allowed=False,
            next_allowed_time=self._resume_time(regular, exceptions, candidate),
        )

    def _blocking(self, exceptions: list[ExceptionWindow], now: datetime) -> list[ExceptionWindow]:
        return [e for e in exceptions if exception_blocks(e, now, self.honor_timezone)]

    def _latest_end(self, exceptions: list[ExceptionWindow]) -> datetime | None:
        ends = [exception_end(e, self.honor_timezone) for e in exceptions]
        ends = [end for end in ends if end is not None]
        return max(ends) if ends else None

    def _earliest_start(self, regular: list[RegularWindow], now: datetime) -> datetime | None:
        starts = [next_window_start(r.window, now, self.honor_timezone) for r in regular]
        starts = [start for start in starts if start is not None]
        return min(starts) if starts else None

    def _resume_time(
        self,
        regular: list[RegularWindow],
        exceptions: list[ExceptionWindow],
        candidate: datetime,
    ) -> datetime | None:
        """Find the first instant at or after ``candidate`` that admits access."""
        for _ in range(MAX_RESUME_STEPS):
            blocking = self._blocking(exceptions, candidate)
            if blocking:
                candidate = self._latest_end(blocking)
                if candidate is None:
                    return None
                continue

            if not regular:
                return None

            if any(window_matches(r.window, candidate, self.honor_timezone) for r in regular):
                return candidate

            candidate = self._earliest_start(regular, candidate)
            if candidate is None:
                return None

        logger.warning("Resume time search did not converge", steps=MAX_RESUME_STEPS)
        return None


def evaluate_group(group: Group, now: datetime, policy: AccessPolicy | None = None) -> GroupAccess:
    """Evaluate a single group at ``now`` under ``policy``."""
    return GroupEvaluator(policy).evaluate(group, now)
