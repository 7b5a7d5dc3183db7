"""SQLAlchemy models for Storefront tables.

All models inherit from the Base class defined in database.py and are
created by DatabaseManager.connect().
"""

from storefront.infrastructure.persistence.models.cart_item import CartItemModel
from storefront.infrastructure.persistence.models.order import OrderItemModel, OrderModel
from storefront.infrastructure.persistence.models.product import ProductModel
from storefront.infrastructure.persistence.models.user import UserModel

__all__ = [
    "CartItemModel",
    "OrderItemModel",
    "OrderModel",
    "ProductModel",
    "UserModel",
]
