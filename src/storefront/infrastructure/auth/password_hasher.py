"""Password hashing utility using Argon2.

Provides salted one-way password hashing and verification using the
Argon2id algorithm. The time cost is taken from settings.
"""

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from storefront.core.config import get_settings


@lru_cache
def _get_hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=get_settings().password_hash_time_cost)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Example:
        >>> hashed = hash_password("abcd1234")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _get_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Uses the hasher's own constant-time comparison.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    try:
        _get_hasher().verify(hashed, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash was produced with outdated parameters."""
    return _get_hasher().check_needs_rehash(hashed)
