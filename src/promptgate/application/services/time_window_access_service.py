"""Time window access service.

Entry point for access checks. Resolves the evaluation instant, fetches the
user's groups from a membership provider and composes the decision, failing
open whenever a dependency misbehaves so that an outage never blocks usage.
"""

from datetime import datetime, timezone

from promptgate.application.services.membership_provider import GroupMembershipProvider
from promptgate.core.config import Settings, get_settings
from promptgate.core.exceptions import InvalidInstantError
from promptgate.core.logging import LoggingContext, get_logger
from promptgate.domain.entities import AccessDecision, AccessPolicy
from promptgate.domain.services import compose_access_decision

logger = get_logger(__name__)


def resolve_now(now: datetime | str | None = None) -> datetime:
    """Resolve the evaluation instant as an aware UTC datetime.

    Args:
        now: An aware or naive (read as UTC) datetime, an ISO-8601 string,
            or None for the current time.

    Returns:
        The instant in UTC.

    Raises:
        InvalidInstantError: If ``now`` cannot be resolved to an instant.
    """
    if now is None:
        return datetime.now(timezone.utc)
    if isinstance(now, str):
        try:
            now = datetime.fromisoformat(now.strip().replace("Z", "+00:00"))
        except ValueError:
            raise InvalidInstantError(f"Cannot parse instant {now!r}")
    if not isinstance(now, datetime):
        raise InvalidInstantError(f"Unsupported instant type {type(now).__name__}")
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    try:
        return now.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        raise InvalidInstantError(f"Instant out of range: {now!r}")


class TimeWindowAccessService:
    """Checks whether a user may send prompts right now.

    The service never raises: membership lookup failures, an unresolvable
    clock and unexpected evaluation errors all result in an allowed decision.
    """

    def __init__(
        self,
        membership_provider: GroupMembershipProvider,
        settings: Settings | None = None,
    ):
        """Initialize the service.

        Args:
            membership_provider: Source of the user's groups.
            settings: Settings used for the default policy.
        """
        self.membership_provider = membership_provider
        self.settings = settings or get_settings()

    def default_policy(self) -> AccessPolicy:
        return AccessPolicy.from_settings(self.settings)

    async def check_time_window_access(
        self,
        user_id: str,
        policy: AccessPolicy | None = None,
        now: datetime | str | None = None,
    ) -> AccessDecision:
        """Check time window access for a user.

        Args:
            user_id: Authenticated user ID.
            policy: Access policy; defaults to the configured policy.
            now: Evaluation instant; defaults to the current time, read once.

        Returns:
            AccessDecision for the user.
        """
        policy = policy or self.default_policy()

        with LoggingContext(user_id=str(user_id)):
            try:
                instant = resolve_now(now)
            except InvalidInstantError as e:
                logger.warning("Invalid evaluation instant, allowing access", error=str(e))
                return AccessDecision.allow()

            try:
                user_groups = await self.membership_provider.get_user_groups(user_id)
            except Exception as e:
                logger.warning(
                    "Error fetching user groups, allowing access",
                    error=str(e),
                    exc_info=True,
                )
                return AccessDecision.allow()

            try:
                groups = list(user_groups or [])
                decision = compose_access_decision(groups, instant, policy)
            except Exception as e:
                logger.error(
                    "Error checking time window access, allowing access",
                    error=str(e),
                    exc_info=True,
                )
                return AccessDecision.allow()

            if not decision.is_allowed:
                logger.info(
                    "Time window access denied",
                    group_count=len(groups),
                    reason=decision.message,
                    next_allowed_time=decision.next_allowed_time_iso,
                )
            return decision


async def check_time_window_access(
    membership_provider: GroupMembershipProvider,
    user_id: str,
    policy: AccessPolicy | None = None,
    now: datetime | str | None = None,
    settings: Settings | None = None,
) -> AccessDecision:
    """Check time window access for a user with a one-off service."""
    service = TimeWindowAccessService(membership_provider, settings=settings)
    return await service.check_time_window_access(user_id, policy=policy, now=now)
