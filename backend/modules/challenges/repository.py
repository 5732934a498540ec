"""
Challenge repositories for the Supabase and in-memory backends.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Optional, Protocol

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, InMemoryRepository
from .exceptions import ChallengeStoreError
from .models import Challenge, CreateChallengeRequest

logger = logging.getLogger(__name__)


class IChallengeRepository(Protocol):
    """Storage contract for challenges."""

    def create(self, request: CreateChallengeRequest, created_by: Optional[int]) -> Challenge:
        ...

    def get(self, challenge_id: int) -> Optional[Challenge]:
        ...

    def list_all(self) -> list[Challenge]:
        """All challenges, latest start date first."""
        ...


class SupabaseChallengeRepository(BaseRepository[Challenge]):
    """Challenges stored in the Supabase ``challenges`` table."""

    TABLE = "challenges"

    def create(self, request: CreateChallengeRequest, created_by: Optional[int]) -> Challenge:
        data = request.model_dump(mode="json")
        data["created_by"] = created_by
        try:
            result = self._db.table(self.TABLE).insert(data).execute()
        except APIError as e:
            logger.error(f"Challenge insert failed: {e.message}")
            raise ChallengeStoreError()
        return self._map_to_challenge(result.data[0])

    def get(self, challenge_id: int) -> Optional[Challenge]:
        try:
            result = self._db.table(self.TABLE).select("*").eq("id", challenge_id).execute()
        except APIError as e:
            logger.error(f"Challenge lookup failed: {e.message}")
            raise ChallengeStoreError()
        if not result.data:
            return None
        return self._map_to_challenge(result.data[0])

    def list_all(self) -> list[Challenge]:
        try:
            result = (
                self._db.table(self.TABLE)
                .select("*")
                .order("start_date", desc=True)
                .execute()
            )
        except APIError as e:
            logger.error(f"Challenge listing failed: {e.message}")
            raise ChallengeStoreError()
        return [self._map_to_challenge(row) for row in result.data]

    def _map_to_challenge(self, data: dict[str, Any]) -> Challenge:
        return Challenge(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            start_date=data["start_date"],
            end_date=data["end_date"],
            created_by=data.get("created_by"),
            created_at=data["created_at"],
        )


class InMemoryChallengeRepository(InMemoryRepository[Challenge]):
    """Process-local challenge store."""

    def create(self, request: CreateChallengeRequest, created_by: Optional[int]) -> Challenge:
        with self._lock:
            challenge = Challenge(
                id=self._next_id(),
                created_by=created_by,
                created_at=datetime.now(timezone.utc),
                **request.model_dump(),
            )
            self._rows[challenge.id] = challenge
        return challenge

    def get(self, challenge_id: int) -> Optional[Challenge]:
        with self._lock:
            return self._rows.get(challenge_id)

    def list_all(self) -> list[Challenge]:
        with self._lock:
            challenges = list(self._rows.values())
        return sorted(challenges, key=lambda c: (c.start_date, c.id), reverse=True)
