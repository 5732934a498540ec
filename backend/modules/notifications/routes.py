"""
Notification API endpoints.

Provides notification creation and listing over REST, and the real-time
WebSocket channel that delivers ``new_notification`` frames.

Socket identity: a client identifies either by connecting with
``/ws?token=<bearer>`` or, later, by sending
``{"action": "identify", "token": "<bearer>"}``. Both resolve the token
through the auth service. Unidentified sockets receive broadcasts only.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket, status

from api.dependencies import get_auth_service, get_broker, get_notification_service
from api.middleware.auth import get_current_user, get_optional_user
from modules.auth.exceptions import UnauthenticatedError
from modules.auth.interfaces import IAuthService
from shared.models import User

from .broker import NotificationBroker
from .models import CreateNotificationRequest, Notification
from .service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter()
socket_router = APIRouter()

IDENTIFY_ACTION = "identify"


@router.post("", response_model=Notification, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: CreateNotificationRequest,
    user: Optional[User] = Depends(get_optional_user),
    service: NotificationService = Depends(get_notification_service),
) -> Notification:
    """
    Create a notification and push it to connected clients.

    ``user_id`` targets one user; omit it to broadcast. Delivery is
    best-effort and does not affect the response.
    """
    notification = await service.create_notification(request.user_id, request.message)
    logger.info(
        f"Notification {notification.id} created by "
        f"{'user ' + str(user.id) if user else 'anonymous caller'}"
    )
    return notification


@router.get("", response_model=list[Notification])
async def list_notifications(
    limit: int = Query(default=50, ge=1, le=200),
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> list[Notification]:
    """List notifications addressed to the caller plus broadcasts, newest first."""
    return await service.list_notifications(user.id, limit)


async def _resolve_user_id(auth: IAuthService, token: Optional[str]) -> Optional[int]:
    try:
        user = await auth.verify(token)
    except UnauthenticatedError as e:
        logger.info(f"Socket identification rejected: {e.code}")
        return None
    return user.id


@socket_router.websocket("/ws")
async def notification_socket(
    websocket: WebSocket,
    token: Optional[str] = Query(default=None),
    auth: IAuthService = Depends(get_auth_service),
    broker: NotificationBroker = Depends(get_broker),
) -> None:
    """
    Real-time notification channel.

    Outbound frames: ``{"event": "new_notification", "notification": {...}}``.
    An invalid ``token`` query parameter closes the socket with 1008.
    """
    user_id = None
    if token is not None:
        user_id = await _resolve_user_id(auth, token)
        if user_id is None:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

    await websocket.accept()
    connection = broker.connect(websocket, user_id=user_id)

    try:
        while True:
            received = await websocket.receive()
            if received["type"] == "websocket.disconnect":
                break
            raw = received.get("text")
            if raw is None:
                logger.debug(f"Ignoring binary frame on connection {connection.connection_id}")
                continue
            try:
                message = json.loads(raw)
            except ValueError:
                logger.debug(f"Ignoring malformed frame on connection {connection.connection_id}")
                continue

            if isinstance(message, dict) and message.get("action") == IDENTIFY_ACTION:
                identified = await _resolve_user_id(auth, message.get("token"))
                if identified is not None:
                    broker.identify(connection.connection_id, identified)
    finally:
        await broker.disconnect(connection.connection_id)
