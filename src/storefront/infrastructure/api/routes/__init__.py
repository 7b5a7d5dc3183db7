"""API Routes for Storefront."""

from storefront.infrastructure.api.routes.order_router import router as order_router
from storefront.infrastructure.api.routes.product_router import router as product_router
from storefront.infrastructure.api.routes.user_router import router as user_router

__all__ = [
    "order_router",
    "product_router",
    "user_router",
]
