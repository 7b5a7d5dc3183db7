"""Authentication service.

Implements the session lifecycle:

1. Login checks credentials and appends a freshly signed token to the
   account's token list.
2. Every protected request presents a token which must verify, must not
   be expired (unless the caller allows it) and must still be in the
   account's token list.
3. Rotation overwrites the presented token in place with a new one.
4. Logout removes exactly the presented token.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import (
    AccountNotFound,
    Forbidden,
    InvalidPassword,
    InvalidSession,
    MissingCredentials,
    SessionExpired,
)
from storefront.core.logging import get_logger
from storefront.infrastructure.auth import (
    InvalidSignatureError,
    SessionTokenService,
    hash_password,
    needs_rehash,
    session_token_service,
    verify_password,
)
from storefront.infrastructure.persistence.models import UserModel
from storefront.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class AuthService:
    """Service for credential checks and session token management."""

    def __init__(
        self,
        session: AsyncSession,
        token_service: SessionTokenService = session_token_service,
    ) -> None:
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_service = token_service

    async def login(self, account: str | None, password: str | None) -> tuple[str, UserModel]:
        """Check credentials and open a new session.

        Returns:
            Tuple of (new session token, user).

        Raises:
            MissingCredentials: If either field is missing.
            AccountNotFound: If no account has this handle.
            InvalidPassword: If the password does not match.
        """
        if not account or not password:
            raise MissingCredentials()

        user = await self.user_repo.get_by_account(account)
        if user is None:
            logger.info("Login failed: account not found", account=account)
            raise AccountNotFound()

        if not verify_password(password, user.password_hash):
            logger.info("Login failed: invalid password", user_id=user.id)
            raise InvalidPassword()

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)

        token = self.token_service.sign(user.id)
        user.tokens.append(token)
        await self.user_repo.save(user)
        await self.session.commit()

        logger.info("Login succeeded", user_id=user.id, sessions=len(user.tokens))
        return token, user

    async def authenticate(self, token: str | None, allow_expired: bool = False) -> UserModel:
        """Resolve the account behind a bearer token.

        Args:
            token: Raw bearer token.
            allow_expired: Accept tokens past their expiry (rotation, logout).

        Returns:
            The user whose live token list contains the token.

        Raises:
            InvalidSession: If the token does not verify or is not live.
            SessionExpired: If the token expired and expiry is not allowed.
        """
        if not token:
            raise InvalidSession()

        try:
            claims = self.token_service.decode(token)
        except InvalidSignatureError as e:
            logger.info("Authentication failed: invalid signature")
            raise InvalidSession() from e

        if claims.expired and not allow_expired:
            logger.info("Authentication failed: session expired", user_id=claims.account_id)
            raise SessionExpired()

        user = await self.user_repo.get_with_token(claims.account_id, token)
        if user is None:
            logger.info("Authentication failed: session not live", user_id=claims.account_id)
            raise InvalidSession()
        return user

    async def rotate(self, user: UserModel, token: str) -> str:
        """Replace a live token with a new one at the same position.

        Returns:
            The new session token.

        Raises:
            InvalidSession: If the token is not in the user's token list.
        """
        try:
            index = user.tokens.index(token)
        except ValueError as e:
            raise InvalidSession() from e

        new_token = self.token_service.sign(user.id)
        user.tokens[index] = new_token
        await self.user_repo.save(user)
        await self.session.commit()

        logger.info("Session rotated", user_id=user.id, position=index)
        return new_token

    async def logout(self, user: UserModel, token: str) -> None:
        """Revoke exactly the presented token; other sessions stay valid."""
        if token in user.tokens:
            user.tokens.remove(token)
            await self.user_repo.save(user)
            await self.session.commit()
        logger.info("Logged out", user_id=user.id, sessions=len(user.tokens))

    @staticmethod
    def require_admin(user: UserModel) -> UserModel:
        """Ensure the user has the ADMIN role.

        Raises:
            Forbidden: If the user is not an administrator.
        """
        if not user.is_admin:
            logger.info("Administrator access denied", user_id=user.id)
            raise Forbidden()
        return user
