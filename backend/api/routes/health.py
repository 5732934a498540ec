"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.notifications.broker import NotificationBroker
from shared.config import get_settings
from ..dependencies import get_broker

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    live_connections: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    broker: NotificationBroker = Depends(get_broker),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports the configured storage backend and the number of live
    notification sockets.
    """
    return ReadinessResponse(
        status="ready",
        storage=get_settings().storage_backend,
        live_connections=broker.connection_count,
    )
