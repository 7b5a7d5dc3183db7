"""Session token service.

Signs and decodes the bearer tokens handed out on login. A token only
proves who it was issued to and until when; whether it is still a live
session is decided by the account's token list.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from storefront.core.config import get_settings


class InvalidSignatureError(Exception):
    """Raised when a token is malformed or its signature does not verify."""

    pass


@dataclass(frozen=True)
class SessionClaims:
    """Claims extracted from a verified session token."""

    account_id: str
    expires_at: datetime

    @property
    def expired(self) -> bool:
        return self.expires_at <= datetime.now(timezone.utc)


class SessionTokenService:
    """Service for signing and decoding session tokens."""

    ALGORITHM = "HS256"
    ISSUER = "storefront"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the token service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens."""
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def default_ttl(self) -> timedelta:
        return timedelta(days=get_settings().session_token_ttl_days)

    def sign(self, account_id: str, ttl: timedelta | None = None) -> str:
        """Create a session token for an account.

        Args:
            account_id: The account's unique identifier.
            ttl: Time to live. Defaults to the configured session lifetime.

        Returns:
            Encoded session token.
        """
        if ttl is None:
            ttl = self.default_ttl()

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": account_id,
            "iat": now,
            "exp": now + ttl,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode(self, token: str) -> SessionClaims:
        """Verify a token's signature and extract its claims.

        Expiry is not enforced here; it is reported through
        SessionClaims.expired so that rotation and logout can accept
        expired tokens.

        Raises:
            InvalidSignatureError: If the token cannot be verified.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"verify_exp": False, "require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError as e:
            raise InvalidSignatureError("Invalid token") from e

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError) as e:
            raise InvalidSignatureError("Invalid expiry claim") from e

        return SessionClaims(account_id=str(payload["sub"]), expires_at=expires_at)


# Default session token service instance
session_token_service = SessionTokenService()
