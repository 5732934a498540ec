"""
Base repository classes for data access.

Two storage backends implement each module's repository contract:
Supabase tables for deployments, and lock-protected in-memory maps for
local development and tests.
"""

import itertools
import threading
from typing import TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ChallengeRepository(BaseRepository[Challenge]):
            def get(self, challenge_id: int) -> Optional[Challenge]:
                result = self._db.table("challenges").select("*").eq("id", challenge_id).execute()
                if not result.data:
                    return None
                return Challenge(**result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def is_unique_violation(error: APIError) -> bool:
        """Whether a Postgrest error was raised by a unique constraint."""
        return error.code == UNIQUE_VIOLATION


class InMemoryRepository(Generic[T]):
    """
    Base class for in-memory repositories.

    Rows live in ``self._rows`` keyed by a monotonically increasing integer
    id. Every read and write must hold ``self._lock``; a check followed by
    a write must happen under a single acquisition.
    """

    def __init__(self) -> None:
        self._rows: dict[int, T] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        return next(self._ids)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)
