"""
Persistence for the client session.

Only the token and the authenticated flag are stored. Loading and error
status are runtime-only and are never written.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel, ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class PersistedSession(BaseModel):
    auth_token: Optional[str] = None
    is_authenticated: bool = False


class TokenStorage(Protocol):
    def load(self) -> Optional[PersistedSession]:
        ...

    def save(self, session: PersistedSession) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryTokenStorage:
    """Keeps the session in process memory."""

    def __init__(self, session: Optional[PersistedSession] = None):
        self._session = session

    def load(self) -> Optional[PersistedSession]:
        return self._session

    def save(self, session: PersistedSession) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileTokenStorage:
    """
    Stores the session as a small JSON file.

    Writes go to a sibling temp file first and are moved into place, so a
    crash mid-write leaves the previous session intact. An unreadable file
    is treated as "no stored session".
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[PersistedSession]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read session file {self.path}: {e}")
            return None

        try:
            return PersistedSession.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError):
            logger.warning(f"Ignoring corrupt session file {self.path}")
            return None

    def save(self, session: PersistedSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(session.model_dump_json(), encoding="utf-8")
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
