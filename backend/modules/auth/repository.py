"""
Credential Store implementations.

SupabaseUserRepository relies on the unique index on ``lower(email)`` in
the ``users`` table; InMemoryUserRepository performs check-and-insert under
a single lock. Both reject a racing duplicate at insert time.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, InMemoryRepository
from .exceptions import CredentialStoreError, DuplicateEmailError
from .models import UserRecord, normalize_email

logger = logging.getLogger(__name__)


class SupabaseUserRepository(BaseRepository[UserRecord]):
    """Users stored in the Supabase ``users`` table."""

    TABLE = "users"

    def create(
        self,
        email: str,
        password_hash: str,
        username: Optional[str] = None,
        is_admin: bool = False,
    ) -> UserRecord:
        email = normalize_email(email)
        data = {
            "email": email,
            "username": username,
            "password_hash": password_hash,
            "is_admin": is_admin,
        }
        try:
            result = self._db.table(self.TABLE).insert(data).execute()
        except APIError as e:
            if self.is_unique_violation(e):
                raise DuplicateEmailError(email)
            logger.error(f"User insert failed: {e.message}")
            raise CredentialStoreError()
        return self._map_to_record(result.data[0])

    def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self._first(self._select().eq("id", user_id))

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._first(self._select().eq("email", normalize_email(email)))

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[UserRecord]:
        try:
            result = (
                self._db.table(self.TABLE)
                .update({"is_admin": is_admin})
                .eq("id", user_id)
                .execute()
            )
        except APIError as e:
            logger.error(f"User update failed: {e.message}")
            raise CredentialStoreError()
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def _select(self):
        return self._db.table(self.TABLE).select("*")

    def _first(self, query) -> Optional[UserRecord]:
        try:
            result = query.limit(1).execute()
        except APIError as e:
            logger.error(f"User lookup failed: {e.message}")
            raise CredentialStoreError()
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def _map_to_record(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=int(data["id"]),
            email=data["email"],
            username=data.get("username"),
            password_hash=data["password_hash"],
            is_admin=bool(data.get("is_admin", False)),
            created_at=data["created_at"],
        )


class InMemoryUserRepository(InMemoryRepository[UserRecord]):
    """Process-local credential store."""

    def __init__(self) -> None:
        super().__init__()
        self._by_email: dict[str, int] = {}

    def create(
        self,
        email: str,
        password_hash: str,
        username: Optional[str] = None,
        is_admin: bool = False,
    ) -> UserRecord:
        email = normalize_email(email)
        with self._lock:
            if email in self._by_email:
                raise DuplicateEmailError(email)
            record = UserRecord(
                id=self._next_id(),
                email=email,
                username=username,
                password_hash=password_hash,
                is_admin=is_admin,
                created_at=datetime.now(timezone.utc),
            )
            self._rows[record.id] = record
            self._by_email[email] = record.id
        return record

    def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            return self._rows.get(user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            user_id = self._by_email.get(normalize_email(email))
            return self._rows.get(user_id) if user_id is not None else None

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[UserRecord]:
        with self._lock:
            record = self._rows.get(user_id)
            if record is None:
                return None
            updated = record.model_copy(update={"is_admin": is_admin})
            self._rows[user_id] = updated
            return updated
