"""
Notification repositories for the Supabase and in-memory backends.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Optional, Protocol

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, InMemoryRepository
from .exceptions import NotificationStoreError
from .models import Notification

logger = logging.getLogger(__name__)


class INotificationRepository(Protocol):
    """Storage contract for notifications."""

    def create(self, user_id: Optional[int], message: str) -> Notification:
        ...

    def list_for_user(self, user_id: int, limit: int = 50) -> list[Notification]:
        """Notifications addressed to ``user_id`` plus broadcasts, newest first."""
        ...


class SupabaseNotificationRepository(BaseRepository[Notification]):
    """Notifications stored in the Supabase ``notifications`` table."""

    TABLE = "notifications"

    def create(self, user_id: Optional[int], message: str) -> Notification:
        try:
            result = (
                self._db.table(self.TABLE)
                .insert({"user_id": user_id, "message": message})
                .execute()
            )
        except APIError as e:
            logger.error(f"Notification insert failed: {e.message}")
            raise NotificationStoreError()
        return self._map_to_notification(result.data[0])

    def list_for_user(self, user_id: int, limit: int = 50) -> list[Notification]:
        try:
            result = (
                self._db.table(self.TABLE)
                .select("*")
                .or_(f"user_id.eq.{user_id},user_id.is.null")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except APIError as e:
            logger.error(f"Notification lookup failed: {e.message}")
            raise NotificationStoreError()
        return [self._map_to_notification(row) for row in result.data]

    def _map_to_notification(self, data: dict[str, Any]) -> Notification:
        return Notification(
            id=int(data["id"]),
            user_id=data.get("user_id"),
            message=data["message"],
            created_at=data["created_at"],
        )


class InMemoryNotificationRepository(InMemoryRepository[Notification]):
    """Process-local notification store."""

    def create(self, user_id: Optional[int], message: str) -> Notification:
        with self._lock:
            notification = Notification(
                id=self._next_id(),
                user_id=user_id,
                message=message,
                created_at=datetime.now(timezone.utc),
            )
            self._rows[notification.id] = notification
        return notification

    def list_for_user(self, user_id: int, limit: int = 50) -> list[Notification]:
        with self._lock:
            visible = [
                n for n in self._rows.values()
                if n.user_id is None or n.user_id == user_id
            ]
        # Ids are monotonic, so they order ties within the same timestamp
        visible.sort(key=lambda n: (n.created_at, n.id), reverse=True)
        return visible[:limit]
