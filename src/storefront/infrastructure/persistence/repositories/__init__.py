"""Repositories for Storefront persistence."""

from storefront.infrastructure.persistence.repositories.order_repository import OrderRepository
from storefront.infrastructure.persistence.repositories.product_repository import (
    ProductRepository,
)
from storefront.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "OrderRepository",
    "ProductRepository",
    "UserRepository",
]
