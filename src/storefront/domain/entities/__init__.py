"""Domain entities for Storefront."""

from storefront.domain.entities.user_role import UserRole

__all__ = ["UserRole"]
