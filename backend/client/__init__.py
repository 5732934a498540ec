"""
Client session package.

Public API:
- SessionStore: Login, logout, register and session restore
- AuthState, AuthStatus, transition: The authentication state machine
- AuthApiClient: HTTP client for the auth endpoints
- FileTokenStorage, MemoryTokenStorage: Session persistence
"""

from .api import AuthApiClient, SessionGrant
from .config import ClientSettings, get_client_settings
from .exceptions import ApiUnavailableError, AuthRequestRejectedError
from .state import AuthState, AuthStatus, transition
from .storage import FileTokenStorage, MemoryTokenStorage, PersistedSession
from .store import SessionStore

__all__ = [
    "SessionStore",
    "AuthState",
    "AuthStatus",
    "transition",
    "AuthApiClient",
    "SessionGrant",
    "ClientSettings",
    "get_client_settings",
    "ApiUnavailableError",
    "AuthRequestRejectedError",
    "FileTokenStorage",
    "MemoryTokenStorage",
    "PersistedSession",
]
