"""Tests for the authentication state machine."""

import pytest

from client.state import (
    INITIAL_STATE,
    AuthState,
    AuthStatus,
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
from shared.models import User

USER = User(id=1, email="alice@example.com", username="alice")
SIGNED_IN = AuthState(current_user=USER, auth_token="tok", status=AuthStatus.AUTHENTICATED)


def assert_consistent(state: AuthState):
    """Authenticated exactly when both user and token are present."""
    both = state.current_user is not None and state.auth_token is not None
    assert state.is_authenticated == (state.status == AuthStatus.AUTHENTICATED)
    assert state.is_authenticated == both


class TestTransition:
    def test_initial_state_is_loading(self):
        assert INITIAL_STATE.status == AuthStatus.LOADING
        assert INITIAL_STATE.is_loading
        assert not INITIAL_STATE.is_authenticated

    def test_login_started(self):
        state = transition(SIGNED_IN.model_copy(update={"error_message": "old"}), LoginStarted())
        assert state.is_loading
        assert state.error_message is None
        assert not state.is_authenticated
        assert state.current_user is None
        assert state.auth_token is None

    def test_check_started_from_signed_in(self):
        state = transition(SIGNED_IN, CheckStarted(token="tok"))
        assert state.is_loading
        assert state.auth_token == "tok"
        assert state.current_user is None
        assert_consistent(state)

    def test_check_started_keeps_existing_token(self):
        state = transition(SIGNED_IN, CheckStarted())
        assert state.auth_token == "tok"
        assert state.current_user is None

    def test_login_succeeded(self):
        state = transition(INITIAL_STATE, LoginSucceeded(user=USER, token="tok"))
        assert state == SIGNED_IN

    def test_login_rejected(self):
        state = transition(SIGNED_IN, LoginFailed(message="Invalid email or password"))
        assert state.status == AuthStatus.UNAUTHENTICATED
        assert state.error_message == "Invalid email or password"
        assert state.current_user is None and state.auth_token is None

    def test_login_unreachable(self):
        state = transition(INITIAL_STATE, LoginFailed(message="offline", server_unreachable=True))
        assert state.status == AuthStatus.ERROR
        assert not state.is_authenticated

    @pytest.mark.parametrize("event", [NoStoredSession(), SessionRejected(), LoggedOut()])
    def test_signed_out_events(self, event):
        state = transition(SIGNED_IN, event)
        assert state.status == AuthStatus.UNAUTHENTICATED
        assert state.current_user is None
        assert state.auth_token is None
        assert state.error_message is None

    def test_session_restored(self):
        loading = transition(INITIAL_STATE, CheckStarted())
        assert transition(loading, SessionRestored(user=USER, token="tok")) == SIGNED_IN

    def test_error_cleared_from_error(self):
        failed = transition(INITIAL_STATE, LoginFailed(message="offline", server_unreachable=True))
        state = transition(failed, ErrorCleared())
        assert state.status == AuthStatus.UNAUTHENTICATED
        assert state.error_message is None

    def test_error_cleared_keeps_status(self):
        failed = transition(INITIAL_STATE, LoginFailed(message="wrong password"))
        state = transition(failed, ErrorCleared())
        assert state.status == AuthStatus.UNAUTHENTICATED
        assert state.error_message is None

    def test_does_not_mutate(self):
        before = SIGNED_IN.model_copy()
        transition(SIGNED_IN, LoggedOut())
        assert SIGNED_IN == before

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            transition(INITIAL_STATE, object())

    def test_every_path_is_consistent(self):
        events = [
            LoginStarted(), LoginSucceeded(user=USER, token="t"), LoginFailed(message="x"),
            LoginFailed(message="y", server_unreachable=True), CheckStarted(), NoStoredSession(),
            SessionRestored(user=USER, token="t"), SessionRejected(), LoggedOut(), ErrorCleared(),
        ]
        for start in (INITIAL_STATE, SIGNED_IN):
            for first in events:
                for second in events:
                    assert_consistent(transition(transition(start, first), second))
