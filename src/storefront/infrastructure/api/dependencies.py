"""FastAPI dependencies for authentication and authorization.

Provides dependencies for extracting the bearer session token from
requests and resolving it to an account.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.logging import get_logger
from storefront.domain.services import AuthService
from storefront.infrastructure.persistence.database import get_db_session
from storefront.infrastructure.persistence.models import UserModel
from storefront.infrastructure.storage import LocalImageStorage

logger = get_logger(__name__)


@dataclass
class SessionContext:
    """The authenticated account and the token it presented."""

    user: UserModel
    token: str


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an "Authorization: Bearer <token>" header value.

    A bare token without the scheme is accepted as well.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    if len(parts) == 1:
        return parts[0]
    return None


class SessionAuthenticator:
    """Dependency resolving the bearer token to a session context.

    Args:
        allow_expired: Accept tokens whose expiry has passed. Used by the
            rotation and logout endpoints only.
    """

    def __init__(self, allow_expired: bool = False) -> None:
        self.allow_expired = allow_expired

    async def __call__(
        self,
        request: Request,
        session: Annotated[AsyncSession, Depends(get_db_session)],
        authorization: Annotated[str | None, Header()] = None,
    ) -> SessionContext:
        """Authenticate the request.

        Raises:
            InvalidSession: If the token is missing, forged or revoked.
            SessionExpired: If the token expired and expiry is not allowed.
        """
        token = extract_bearer_token(authorization)
        user = await AuthService(session).authenticate(token, allow_expired=self.allow_expired)
        request.state.user_id = user.id
        return SessionContext(user=user, token=token)


get_session_context = SessionAuthenticator()
get_session_context_allow_expired = SessionAuthenticator(allow_expired=True)

# Type aliases for dependency injection
AuthenticatedSession = Annotated[SessionContext, Depends(get_session_context)]
LenientSession = Annotated[SessionContext, Depends(get_session_context_allow_expired)]


async def require_admin(context: AuthenticatedSession) -> SessionContext:
    """Ensure the authenticated account is an administrator.

    Raises:
        Forbidden: If the account is not an administrator.
    """
    AuthService.require_admin(context.user)
    return context


AdminSession = Annotated[SessionContext, Depends(require_admin)]


def get_image_storage(request: Request) -> LocalImageStorage:
    """Get the image storage from app state."""
    return request.app.state.image_storage


ImageStorage = Annotated[LocalImageStorage, Depends(get_image_storage)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
