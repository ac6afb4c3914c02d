"""Time window guard for prompt-submitting routes.

Provides a FastAPI dependency factory that rejects requests made outside the
caller's allowed time windows with a 403 carrying the retry instant.

Example:
    validate_time_windows = create_time_window_validator()

    @router.post("/prompts", dependencies=[Depends(validate_time_windows)])
    async def send_prompt(...): ...
"""

from typing import Awaitable, Callable, Iterable

from fastapi import HTTPException, Request, status

from promptgate.application.services import TimeWindowAccessService
from promptgate.core.config import Settings, get_settings
from promptgate.core.logging import get_logger
from promptgate.domain.entities import AccessDecision, AccessPolicy
from promptgate.infrastructure.api.dependencies import (
    MembershipProviderDep,
    get_authenticated_user,
)
from promptgate.infrastructure.api.schemas import TimeWindowRestrictionResponse

logger = get_logger(__name__)


def create_time_window_validator(
    policy: AccessPolicy | None = None,
    bypass_roles: Iterable[str] | None = None,
    settings: Settings | None = None,
) -> Callable[..., Awaitable[AccessDecision]]:
    """Create a dependency that enforces time windows for the current user.

    Args:
        policy: Access policy; defaults to the configured policy.
        bypass_roles: Roles that skip the check; defaults to settings.bypass_roles.
        settings: Settings instance; defaults to get_settings().

    Returns:
        An async FastAPI dependency returning the AccessDecision.
    """
    settings = settings or get_settings()
    policy = policy or AccessPolicy.from_settings(settings)
    exempt_roles = frozenset(settings.bypass_roles if bypass_roles is None else bypass_roles)

    async def validate_time_windows(
        request: Request,
        membership_provider: MembershipProviderDep,
    ) -> AccessDecision:
        user = get_authenticated_user(request)
        if user is None or not getattr(user, "user_id", None):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "Authentication required", "type": "auth_required"},
            )

        if getattr(user, "role", None) in exempt_roles:
            logger.debug("Time window check bypassed", user_id=user.user_id, role=user.role)
            return AccessDecision.allow()

        try:
            service = TimeWindowAccessService(membership_provider, settings=settings)
            decision = await service.check_time_window_access(user.user_id, policy=policy)
        except Exception as e:
            logger.error("Error in time window validation, allowing request", error=str(e), exc_info=True)
            return AccessDecision.allow()

        if not decision.is_allowed:
            logger.warning(
                "Request rejected outside time windows",
                user_id=user.user_id,
                reason=decision.message,
            )
            body = TimeWindowRestrictionResponse.from_decision(decision)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=body.model_dump(by_alias=True),
            )

        return decision

    return validate_time_windows
