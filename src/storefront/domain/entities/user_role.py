"""Account roles."""

from enum import Enum


class UserRole(str, Enum):
    """Role flag stored on every account."""

    USER = "USER"
    ADMIN = "ADMIN"
