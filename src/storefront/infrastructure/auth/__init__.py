"""Authentication infrastructure components.

This module provides password hashing and session token services.
"""

from storefront.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)
from storefront.infrastructure.auth.session_token_service import (
    InvalidSignatureError,
    SessionClaims,
    SessionTokenService,
    session_token_service,
)

__all__ = [
    "InvalidSignatureError",
    "SessionClaims",
    "SessionTokenService",
    "hash_password",
    "needs_rehash",
    "session_token_service",
    "verify_password",
]
