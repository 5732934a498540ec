"""
Activity repositories for the Supabase and in-memory backends.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Protocol

from postgrest.exceptions import APIError

from shared.exceptions import ExternalServiceError
from shared.repository import BaseRepository, InMemoryRepository
from .models import Activity, CreateActivityRequest

logger = logging.getLogger(__name__)


class IActivityRepository(Protocol):
    """Storage contract for activities."""

    def create(self, user_id: int, request: CreateActivityRequest) -> Activity:
        ...

    def list_for_user(self, user_id: int) -> list[Activity]:
        """A user's activities, most recent date first."""
        ...


class SupabaseActivityRepository(BaseRepository[Activity]):
    """Activities stored in the Supabase ``activities`` table."""

    TABLE = "activities"

    def create(self, user_id: int, request: CreateActivityRequest) -> Activity:
        data = request.model_dump(mode="json")
        data["user_id"] = user_id
        try:
            result = self._db.table(self.TABLE).insert(data).execute()
        except APIError as e:
            logger.error(f"Activity insert failed: {e.message}")
            raise ExternalServiceError("Activity store unavailable", service="activity_store")
        return self._map_to_activity(result.data[0])

    def list_for_user(self, user_id: int) -> list[Activity]:
        try:
            result = (
                self._db.table(self.TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("date", desc=True)
                .execute()
            )
        except APIError as e:
            logger.error(f"Activity listing failed: {e.message}")
            raise ExternalServiceError("Activity store unavailable", service="activity_store")
        return [self._map_to_activity(row) for row in result.data]

    def _map_to_activity(self, data: dict[str, Any]) -> Activity:
        return Activity(
            id=int(data["id"]),
            user_id=int(data["user_id"]),
            activity_type=data["activity_type"],
            date=data["date"],
            description=data.get("description"),
            challenge_id=data.get("challenge_id"),
            created_at=data["created_at"],
        )


class InMemoryActivityRepository(InMemoryRepository[Activity]):
    """Process-local activity store."""

    def create(self, user_id: int, request: CreateActivityRequest) -> Activity:
        with self._lock:
            activity = Activity(
                id=self._next_id(),
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
                **request.model_dump(),
            )
            self._rows[activity.id] = activity
        return activity

    def list_for_user(self, user_id: int) -> list[Activity]:
        with self._lock:
            mine = [a for a in self._rows.values() if a.user_id == user_id]
        return sorted(mine, key=lambda a: (a.date, a.id), reverse=True)
