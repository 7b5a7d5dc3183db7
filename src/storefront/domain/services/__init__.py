"""Domain services for Storefront.

Services hold the business rules of accounts, sessions, the catalog, carts
and orders. They receive an AsyncSession and work through repositories.
"""

from storefront.domain.services.account_service import AccountService
from storefront.domain.services.account_validator import (
    AccountValidationError,
    AccountValidator,
    default_account_validator,
)
from storefront.domain.services.auth_service import AuthService
from storefront.domain.services.cart_service import CartService
from storefront.domain.services.order_service import OrderService
from storefront.domain.services.product_service import ProductQuery, ProductService
from storefront.domain.services.product_validator import (
    ProductValidationError,
    ProductValidator,
    default_product_validator,
)

__all__ = [
    "AccountService",
    "AccountValidationError",
    "AccountValidator",
    "AuthService",
    "CartService",
    "OrderService",
    "ProductQuery",
    "ProductService",
    "ProductValidationError",
    "ProductValidator",
    "default_account_validator",
    "default_product_validator",
]
