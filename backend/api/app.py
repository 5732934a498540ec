"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.logging import configure_logging
from .dependencies import get_container
from .middleware.errors import register_exception_handlers
from .models.errors import ErrorResponse
from .routes import auth, health, users
from modules.activities.routes import router as activities_router
from modules.challenges.routes import router as challenges_router
from modules.notifications.routes import router as notifications_router
from modules.notifications.routes import socket_router as notifications_socket_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage: {settings.storage_backend})"
    )

    container = get_container()
    if settings.admin_email and settings.admin_password:
        await container.auth.ensure_admin(settings.admin_email, settings.admin_password)

    yield

    # Shutdown
    await container.broker.shutdown()
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Environmental challenges, activity logging and real-time notifications",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            403: {"model": ErrorResponse},
        },
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(challenges_router, prefix="/api/challenges", tags=["challenges"])
    app.include_router(activities_router, prefix="/api/activities", tags=["activities"])
    app.include_router(notifications_router, prefix="/api/notifications", tags=["notifications"])
    app.include_router(notifications_socket_router, tags=["notifications"])

    return app


# Application instance for uvicorn
app = create_app()
