"""
Authentication lifecycle state machine.

``transition`` is a pure function from (state, event) to the next state.
Every state it produces satisfies: status is AUTHENTICATED exactly when
both current_user and auth_token are set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from shared.models import User


class AuthStatus(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    # The server could not be reached during login
    ERROR = "error"


class AuthState(BaseModel):
    """Immutable snapshot of the client's authentication lifecycle."""

    current_user: Optional[User] = None
    auth_token: Optional[str] = None
    status: AuthStatus = AuthStatus.LOADING
    error_message: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.status == AuthStatus.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self.status == AuthStatus.LOADING


INITIAL_STATE = AuthState()


@dataclass(frozen=True)
class LoginStarted:
    pass


@dataclass(frozen=True)
class LoginSucceeded:
    user: User
    token: str


@dataclass(frozen=True)
class LoginFailed:
    message: str
    server_unreachable: bool = False


@dataclass(frozen=True)
class CheckStarted:
    token: Optional[str] = None


@dataclass(frozen=True)
class NoStoredSession:
    pass


@dataclass(frozen=True)
class SessionRestored:
    user: User
    token: str


@dataclass(frozen=True)
class SessionRejected:
    pass


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class ErrorCleared:
    pass


AuthEvent = Union[
    LoginStarted,
    LoginSucceeded,
    LoginFailed,
    CheckStarted,
    NoStoredSession,
    SessionRestored,
    SessionRejected,
    LoggedOut,
    ErrorCleared,
]

SIGNED_OUT = AuthState(status=AuthStatus.UNAUTHENTICATED)


def transition(state: AuthState, event: AuthEvent) -> AuthState:
    """Compute the next state. Never mutates ``state``."""
    if isinstance(event, LoginStarted):
        return AuthState(status=AuthStatus.LOADING)

    if isinstance(event, CheckStarted):
        # The token under check stays visible; the user is unknown until verified
        return AuthState(
            status=AuthStatus.LOADING,
            auth_token=event.token or state.auth_token,
        )

    if isinstance(event, (LoginSucceeded, SessionRestored)):
        return AuthState(
            current_user=event.user,
            auth_token=event.token,
            status=AuthStatus.AUTHENTICATED,
        )

    if isinstance(event, LoginFailed):
        return AuthState(
            status=AuthStatus.ERROR if event.server_unreachable else AuthStatus.UNAUTHENTICATED,
            error_message=event.message,
        )

    if isinstance(event, (NoStoredSession, SessionRejected, LoggedOut)):
        return SIGNED_OUT

    if isinstance(event, ErrorCleared):
        if state.status == AuthStatus.ERROR:
            return SIGNED_OUT
        return state.model_copy(update={"error_message": None})

    raise TypeError(f"Unknown auth event: {event!r}")
