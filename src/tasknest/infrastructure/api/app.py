"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasknest.core.config import Settings, get_settings
from tasknest.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from tasknest.domain import exceptions as errors
from tasknest.infrastructure.api.middleware import (
    RateLimitMiddleware,
    RateLimitStorage,
    code_issuing_paths,
)
from tasknest.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)
from tasknest.infrastructure.scheduling import shutdown_scheduler, start_scheduler

logger = get_logger(__name__)

# Looked up along the error's MRO, so a subclass entry overrides its base.
ERROR_STATUS: dict[type[errors.LifecycleError], int] = {
    errors.CodeNotFound: status.HTTP_400_BAD_REQUEST,
    errors.NotFound: status.HTTP_404_NOT_FOUND,
    errors.Conflict: status.HTTP_409_CONFLICT,
    errors.Expired: status.HTTP_400_BAD_REQUEST,
    errors.AlreadyUsed: status.HTTP_400_BAD_REQUEST,
    errors.TooManyAttempts: status.HTTP_429_TOO_MANY_REQUESTS,
    errors.NoLongerPending: status.HTTP_400_BAD_REQUEST,
    errors.AlreadyMember: status.HTTP_409_CONFLICT,
    errors.CannotRemoveOwner: status.HTTP_400_BAD_REQUEST,
    errors.Unauthorized: status.HTTP_403_FORBIDDEN,
    errors.InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    errors.ValidationFailed: status.HTTP_400_BAD_REQUEST,
    errors.DeliveryFailed: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: errors.LifecycleError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Initializes logging and the database, and runs the expiry sweep
    scheduler while the application is serving.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting TaskNest",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    scheduler_started = settings.cleanup_enabled and not settings.is_testing
    if scheduler_started:
        start_scheduler()

    yield

    logger.info("Shutting down TaskNest")
    if scheduler_started:
        shutdown_scheduler()
    await close_database()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app from. Defaults to ``get_settings()``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Account verification and workspace invitation API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app, settings)
    register_exception_handlers(app, settings)
    register_middleware(app, settings)

    return app


def register_health_check(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health_check():
        """Returns 200 with database status; 503 if the database is unreachable."""
        db_healthy = await get_db_manager().check_connection()
        body = {
            "status": "healthy" if db_healthy else "degraded",
            "service": "TaskNest",
            "version": get_settings().app_version,
            "database": "connected" if db_healthy else "disconnected",
        }
        if not db_healthy:
            return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
        return body


def register_routes(app: FastAPI, settings: Settings) -> None:
    from tasknest.infrastructure.api.routes import (
        auth_router,
        invitations_router,
        users_router,
        workspaces_router,
    )

    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(invitations_router, prefix=f"{prefix}/invitations", tags=["invitations"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(workspaces_router, prefix=f"{prefix}/workspaces", tags=["workspaces"])


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map errors to the ``{success, message, errors}`` envelope."""

    @app.exception_handler(errors.LifecycleError)
    async def lifecycle_error_handler(request: Request, exc: errors.LifecycleError):
        status_code = status_for(exc)
        logger.info(
            "Request failed",
            path=request.url.path,
            error=type(exc).__name__,
            status_code=status_code,
        )
        content: dict = {"success": False, "message": exc.message}
        if isinstance(exc, errors.ValidationFailed) and exc.errors:
            content["errors"] = exc.errors
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"][1:]) or None,
                "message": error["msg"],
                "code": error["type"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={"success": False, "message": "Validation error", "errors": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
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
            content={
                "success": False,
                "message": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI, settings: Settings) -> None:
    if settings.rate_limit_enabled:
        app.state.rate_limit_storage = RateLimitStorage()
        app.add_middleware(
            RateLimitMiddleware,
            paths=code_issuing_paths(settings.api_prefix),
            rate_per_minute=settings.rate_limit_per_minute,
            burst=settings.rate_limit_burst,
            storage=app.state.rate_limit_storage,
        )

    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Middleware to log all requests and add correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info("Request started", method=request.method, path=str(request.url.path))

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
