"""
Notification service.

Persists notifications and hands each new one to the broker. Delivery is
fire-and-forget: a failed or missing recipient never fails creation.
"""

import asyncio
import logging
from typing import Optional

from .broker import NotificationBroker
from .models import Notification
from .repository import INotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates notifications and publishes them to live sockets."""

    def __init__(self, repository: INotificationRepository, broker: NotificationBroker):
        self._repository = repository
        self._broker = broker

    async def create_notification(self, user_id: Optional[int], message: str) -> Notification:
        """Store a notification, then publish it to connected clients."""
        notification = await asyncio.to_thread(self._repository.create, user_id, message)
        delivered = self._broker.publish(notification)
        logger.debug(f"Notification {notification.id} queued for {delivered} connection(s)")
        return notification

    async def list_notifications(self, user_id: int, limit: int = 50) -> list[Notification]:
        """Notifications visible to a user, newest first."""
        return await asyncio.to_thread(self._repository.list_for_user, user_id, limit)
