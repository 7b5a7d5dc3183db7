"""Pydantic schemas for API requests and responses."""

from storefront.infrastructure.api.schemas.common import ApiResponse, error_body
from storefront.infrastructure.api.schemas.order_schemas import (
    AdminOrderResponse,
    OrderLineResponse,
    OrderOwnerResponse,
    OrderResponse,
    PlacedOrderLine,
    PlacedOrderResponse,
)
from storefront.infrastructure.api.schemas.product_schemas import (
    ProductPageResponse,
    ProductResponse,
)
from storefront.infrastructure.api.schemas.user_schemas import (
    CartLineResponse,
    CartUpdateRequest,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
)

__all__ = [
    "AdminOrderResponse",
    "ApiResponse",
    "CartLineResponse",
    "CartUpdateRequest",
    "LoginRequest",
    "LoginResponse",
    "OrderLineResponse",
    "OrderOwnerResponse",
    "OrderResponse",
    "PlacedOrderLine",
    "PlacedOrderResponse",
    "ProductPageResponse",
    "ProductResponse",
    "ProfileResponse",
    "RegisterRequest",
    "error_body",
]
