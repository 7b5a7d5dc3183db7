"""HTTP middleware package."""

from storefront.infrastructure.api.middleware.rate_limit_middleware import RateLimitMiddleware
from storefront.infrastructure.api.middleware.rate_limit_storage import (
    RateLimitDecision,
    RateLimitStorage,
)

__all__ = [
    "RateLimitDecision",
    "RateLimitMiddleware",
    "RateLimitStorage",
]
