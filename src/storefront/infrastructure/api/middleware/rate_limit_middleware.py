"""Rate limiting middleware.

Limits the number of requests a single client address may make within a
time window.
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from storefront.core.exceptions import RateLimited
from storefront.core.logging import get_logger
from storefront.infrastructure.api.middleware.rate_limit_storage import RateLimitStorage
from storefront.infrastructure.api.schemas import error_body

logger = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce rate limits on API requests."""

    def __init__(self, app: ASGIApp, storage: RateLimitStorage, enabled: bool = True) -> None:
        super().__init__(app)
        self.storage = storage
        self.enabled = enabled

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request and enforce rate limits.

        Returns:
            The response from the application or a 429 error.
        """
        if not self.enabled:
            return await call_next(request)

        key = request.client.host if request.client else "unknown"
        decision = self.storage.hit(key)
        reset = str(int(decision.reset_seconds))

        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded",
                client=key,
                path=request.url.path,
                retry_after=reset,
            )
            error = RateLimited()
            return JSONResponse(
                status_code=error.status_code,
                content=error_body(error.message),
                headers={
                    "Retry-After": reset,
                    "X-RateLimit-Limit": str(decision.limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": reset,
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(decision.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        response.headers["X-RateLimit-Reset"] = reset

        return response
