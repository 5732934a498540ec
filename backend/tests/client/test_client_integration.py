"""End-to-end tests of the session store against the real application."""

import httpx
import pytest

from api.app import create_app
from client.api import AuthApiClient
from client.exceptions import AuthRequestRejectedError
from client.state import AuthStatus
from client.storage import FileTokenStorage
from client.store import SessionStore


@pytest.fixture
def api_client():
    transport = httpx.ASGITransport(app=create_app())
    return AuthApiClient("http://testserver", transport=transport)


class TestSessionStoreAgainstApi:
    @pytest.mark.asyncio
    async def test_register_login_restore_logout(self, api_client, tmp_path):
        path = tmp_path / "session.json"
        store = SessionStore(api_client, FileTokenStorage(path))

        await store.register("carol@example.com", "pw", "carol")
        store.logout()
        state = await store.login("Carol@Example.com", "pw")
        assert state.is_authenticated
        assert state.current_user.username == "carol"

        # A new process rehydrates from disk and re-validates
        restored = SessionStore(api_client, FileTokenStorage(path))
        assert restored.state.is_loading
        state = await restored.check_auth()
        assert state.is_authenticated
        assert state.current_user.email == "carol@example.com"

        restored.logout()
        assert not path.exists()
        await api_client.aclose()

    @pytest.mark.asyncio
    async def test_duplicate_registration_surfaces_message(self, api_client, tmp_path):
        store = SessionStore(api_client, FileTokenStorage(tmp_path / "s.json"))
        await store.register("dave@example.com", "pw")

        with pytest.raises(AuthRequestRejectedError):
            await store.register("dave@example.com", "pw")

        assert store.state.status == AuthStatus.UNAUTHENTICATED
        assert store.state.error_message == "An account with this email already exists"
        await api_client.aclose()
