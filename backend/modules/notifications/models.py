"""
Notification data models.

A Notification is owned by whoever creates it; the broker only transports
it to live sockets as a ``new_notification`` frame.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class Notification(BaseModel):
    """A stored notification. ``user_id=None`` means broadcast."""

    id: int
    user_id: Optional[int] = None
    message: str
    created_at: datetime

    @property
    def is_broadcast(self) -> bool:
        return self.user_id is None


class CreateNotificationRequest(BaseModel):
    """Body of POST /api/notifications."""

    user_id: Optional[int] = Field(None, description="Target user, or null to broadcast")
    message: str = Field(..., min_length=1, max_length=1000)


class NotificationEventType(str, Enum):
    """Outbound socket event types."""

    NEW_NOTIFICATION = "new_notification"


class NotificationEvent(BaseModel):
    """A JSON frame pushed over the real-time channel."""

    event: NotificationEventType = NotificationEventType.NEW_NOTIFICATION
    notification: Notification

    def to_frame(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
