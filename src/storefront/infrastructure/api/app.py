"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import StorefrontError
from storefront.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from storefront.infrastructure.api.middleware import RateLimitMiddleware, RateLimitStorage
from storefront.infrastructure.api.schemas import error_body
from storefront.infrastructure.persistence.database import DatabaseManager
from storefront.infrastructure.storage import LocalImageStorage

logger = get_logger(__name__)

CONCURRENT_UPDATE_MESSAGE = "Account was modified by another request"
INVALID_BODY_MESSAGE = "Invalid request body"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Connects the database on startup, bootstraps the administrator account
    when configured, and disconnects on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    db: DatabaseManager = app.state.db

    configure_logging(settings)
    logger.info(
        "Starting Storefront",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    storage_path = Path(settings.storage_path)
    storage_path.mkdir(parents=True, exist_ok=True)
    logger.info("Storage directory ready", path=str(storage_path))

    try:
        await db.connect()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    if settings.has_admin_bootstrap:
        from storefront.domain.services import AccountService

        async with db.session() as session:
            await AccountService(session).ensure_admin(
                settings.admin_account, settings.admin_email, settings.admin_password
            )

    yield

    logger.info("Shutting down Storefront")
    await db.disconnect()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Storefront backend: accounts, catalog, cart and orders",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = DatabaseManager(settings)
    app.state.image_storage = LocalImageStorage(settings)
    app.state.rate_limit_storage = RateLimitStorage(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app, settings)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity.
        """
        return {
            "status": "healthy",
            "service": "Storefront",
            "version": request.app.state.settings.app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check(request: Request):
        """Readiness check endpoint.

        Returns 200 if the database is reachable, 503 otherwise.
        """
        db: DatabaseManager = request.app.state.db
        if await db.check_connection():
            return {
                "status": "ready",
                "service": "Storefront",
                "database": "connected",
            }
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "service": "Storefront",
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from storefront.infrastructure.api.routes import (
        order_router,
        product_router,
        user_router,
    )

    app.include_router(user_router, prefix="/user", tags=["user"])
    app.include_router(product_router, prefix="/product", tags=["product"])
    app.include_router(order_router, prefix="/order", tags=["order"])


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return INVALID_BODY_MESSAGE
    first = errors[0]
    if first.get("type") == "json_invalid":
        return INVALID_BODY_MESSAGE
    # loc starts with the parameter source (body, query, path, form)
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    return f"{field}: {first['msg']}" if field else first["msg"]


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers that render failures as envelopes.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        logger.info(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error=type(exc).__name__,
            status_code=exc.status_code,
        )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info("Request validation failed", path=request.url.path, message=message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StaleDataError)
    async def stale_data_handler(request: Request, exc: StaleDataError):
        logger.warning(
            "Concurrent account update rejected",
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body(CONCURRENT_UPDATE_MESSAGE),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Unknown error"),
        )


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware.

    Middleware added last runs first, so CORS wraps rate limiting, which
    wraps request logging.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log all requests and bind a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()

    app.add_middleware(
        RateLimitMiddleware,
        storage=app.state.rate_limit_storage,
        enabled=settings.rate_limit_enabled,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Create the application instance
app = create_app()
