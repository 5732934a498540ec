"""
Client-side session store.

Holds the current AuthState, applies events through ``transition`` and
persists the durable part of the state after every change.
"""

import logging
from typing import Callable, Optional

from shared.exceptions import EcoChallengeError
from .api import AuthApiClient, SessionGrant
from .exceptions import ApiUnavailableError
from .state import (
    INITIAL_STATE,
    AuthEvent,
    AuthState,
    CheckStarted,
    ErrorCleared,
    LoggedOut,
    LoginFailed,
    LoginStarted,
    LoginSucceeded,
    NoStoredSession,
    SessionRejected,
    SessionRestored,
    transition,
)
from .storage import PersistedSession, TokenStorage

logger = logging.getLogger(__name__)

Listener = Callable[[AuthState], None]


class SessionStore:
    """
    Owns the authentication lifecycle of one client.

    Operations are not serialized against each other. If two logins (or a
    login and a logout) overlap, whichever finishes last decides the final
    state.
    """

    def __init__(self, api: AuthApiClient, storage: TokenStorage):
        self._api = api
        self._storage = storage
        self._state = INITIAL_STATE
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def login(self, email: str, password: str) -> AuthState:
        """
        Log in with credentials.

        On failure the state records the error and the exception is
        re-raised to the caller.
        """
        self._dispatch(LoginStarted())
        try:
            grant = await self._api.login(email, password)
        except EcoChallengeError as e:
            self._fail(e)
            raise
        return self._accept(grant)

    async def register(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> AuthState:
        """Create an account and start a session with it."""
        self._dispatch(LoginStarted())
        try:
            grant = await self._api.register(email, password, username)
        except EcoChallengeError as e:
            self._fail(e)
            raise
        return self._accept(grant)

    def logout(self) -> AuthState:
        # Tokens are stateless on the server, so logout is local only
        self._dispatch(LoggedOut())
        self._storage.clear()
        return self._state

    async def check_auth(self) -> AuthState:
        """
        Re-validate the stored token against the server.

        Any failure, including an unreachable server, ends the session and
        discards the stored token. There is no retry.
        """
        token = self._state.auth_token
        if not token:
            persisted = self._storage.load()
            token = persisted.auth_token if persisted else None

        if not token:
            self._dispatch(NoStoredSession())
            return self._state

        self._dispatch(CheckStarted(token=token))
        try:
            user = await self._api.verify(token)
        except EcoChallengeError as e:
            logger.info(f"Stored session rejected: {e.message}")
            self._dispatch(SessionRejected())
            self._storage.clear()
            return self._state

        self._dispatch(SessionRestored(user=user, token=token))
        return self._state

    def clear_error(self) -> AuthState:
        self._dispatch(ErrorCleared())
        return self._state

    def _accept(self, grant: SessionGrant) -> AuthState:
        self._dispatch(LoginSucceeded(user=grant.user, token=grant.auth_token))
        return self._state

    def _fail(self, error: EcoChallengeError) -> None:
        self._dispatch(
            LoginFailed(
                message=error.message,
                server_unreachable=isinstance(error, ApiUnavailableError),
            )
        )

    def _dispatch(self, event: AuthEvent) -> None:
        self._state = transition(self._state, event)
        self._storage.save(
            PersistedSession(
                auth_token=self._state.auth_token,
                is_authenticated=self._state.is_authenticated,
            )
        )
        for listener in list(self._listeners):
            listener(self._state)
