"""FastAPI dependencies for time window checks.

Authentication happens upstream; the authenticating middleware is expected to
place an object with ``user_id`` and ``role`` attributes on
``request.state.authenticated_user``.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from promptgate.application.services import GroupMembershipProvider
from promptgate.infrastructure.persistence.database import get_db_session
from promptgate.infrastructure.persistence.repositories import GroupMembershipRepository


@dataclass
class AuthenticatedUser:
    """The authenticated caller as seen by the guard."""

    user_id: str
    role: str = "user"
    email: str | None = None


def get_authenticated_user(request: Request) -> AuthenticatedUser | None:
    """Return the user placed on the request by the authentication layer, if any."""
    return getattr(request.state, "authenticated_user", None)


async def get_membership_provider(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> GroupMembershipProvider:
    """Membership provider for the current request."""
    return GroupMembershipRepository(session)


MembershipProviderDep = Annotated[GroupMembershipProvider, Depends(get_membership_provider)]
