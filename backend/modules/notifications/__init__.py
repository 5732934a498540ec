"""
Notifications module.

Stores notifications and pushes them to live WebSocket connections.

Public API:
- NotificationBroker: Registry of live connections and fan-out
- NotificationService: Create/list notifications, publishing new ones
- Notification, NotificationEvent: Data models
"""

from .broker import Connection, NotificationBroker
from .models import (
    CreateNotificationRequest,
    Notification,
    NotificationEvent,
    NotificationEventType,
)
from .exceptions import NotificationStoreError
from .service import NotificationService

__all__ = [
    "Connection",
    "NotificationBroker",
    "NotificationService",
    "CreateNotificationRequest",
    "Notification",
    "NotificationEvent",
    "NotificationEventType",
    "NotificationStoreError",
]
