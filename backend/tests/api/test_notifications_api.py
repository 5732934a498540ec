"""Tests for the notification endpoints and the real-time socket."""

import time

import pytest
from starlette.websockets import WebSocketDisconnect


class TestCreateNotification:
    def test_create_broadcast(self, client):
        response = client.post("/api/notifications", json={"message": "Earth Hour tonight"})
        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] is None
        assert data["message"] == "Earth Hour tonight"
        assert data["created_at"]

    def test_empty_message_rejected(self, client):
        response = client.post("/api/notifications", json={"message": ""})
        assert response.status_code == 400

    def test_created_without_any_listener(self, client, user_session, auth_headers):
        response = client.post(
            "/api/notifications",
            json={"user_id": user_session["user_id"], "message": "You earned a badge"},
        )
        assert response.status_code == 201

        listed = client.get("/api/notifications", headers=auth_headers).json()
        assert [n["message"] for n in listed] == ["You earned a badge"]


class TestListNotifications:
    def test_requires_authentication(self, client):
        assert client.get("/api/notifications").status_code == 401

    def test_sees_own_and_broadcast_only(self, client, user_session, auth_headers, register_user):
        bob = register_user("bob@example.com")
        client.post("/api/notifications", json={"message": "For everyone"})
        client.post("/api/notifications", json={"user_id": bob["user_id"], "message": "For bob"})
        client.post("/api/notifications", json={"user_id": user_session["user_id"], "message": "For alice"})

        messages = {n["message"] for n in client.get("/api/notifications", headers=auth_headers).json()}
        assert messages == {"For everyone", "For alice"}


class TestNotificationSocket:
    def test_broadcast_frame(self, client, wait_for_sockets):
        with client.websocket_connect("/ws") as ws:
            wait_for_sockets(1)
            created = client.post("/api/notifications", json={"message": "Hello all"}).json()
            frame = ws.receive_json()

        assert frame == {"event": "new_notification", "notification": created}

    def test_targeted_delivery_with_query_token(self, client, user_session, register_user, wait_for_sockets):
        bob = register_user("bob@example.com")
        alice_url = f"/ws?token={user_session['auth_token']}"
        bob_url = f"/ws?token={bob['auth_token']}"

        with client.websocket_connect(alice_url) as alice_ws, client.websocket_connect(bob_url) as bob_ws:
            wait_for_sockets(2)
            client.post("/api/notifications", json={"user_id": bob["user_id"], "message": "Only bob"})
            client.post("/api/notifications", json={"message": "Everyone"})

            # Alice's first frame is the broadcast, so the targeted one skipped her
            assert alice_ws.receive_json()["notification"]["message"] == "Everyone"
            assert bob_ws.receive_json()["notification"]["message"] == "Only bob"
            assert bob_ws.receive_json()["notification"]["message"] == "Everyone"

    def test_identify_message(self, client, container, user_session, wait_for_sockets):
        user_id = user_session["user_id"]
        with client.websocket_connect("/ws") as ws:
            wait_for_sockets(1)
            ws.send_json({"action": "identify", "token": user_session["auth_token"]})

            deadline = time.monotonic() + 2
            while not container.broker.connections_for(user_id):
                assert time.monotonic() < deadline
                time.sleep(0.01)

            client.post("/api/notifications", json={"user_id": user_id, "message": "Found you"})
            assert ws.receive_json()["notification"]["message"] == "Found you"

    def test_bad_identify_keeps_socket_anonymous(self, client, container, wait_for_sockets):
        with client.websocket_connect("/ws") as ws:
            wait_for_sockets(1)
            ws.send_text("not json")
            ws.send_json({"action": "identify", "token": "garbage"})
            client.post("/api/notifications", json={"message": "Still here"})
            assert ws.receive_json()["notification"]["message"] == "Still here"
            assert all(c.associated_user_id is None for c in container.broker._connections.values())

    def test_binary_frame_is_ignored(self, client, container, user_session, wait_for_sockets):
        user_id = user_session["user_id"]
        with client.websocket_connect("/ws") as ws:
            wait_for_sockets(1)
            ws.send_bytes(b"\x00\x01")
            # Handled only if the loop survived the binary frame
            ws.send_json({"action": "identify", "token": user_session["auth_token"]})

            deadline = time.monotonic() + 2
            while not container.broker.connections_for(user_id):
                assert time.monotonic() < deadline
                time.sleep(0.01)

            client.post("/api/notifications", json={"message": "After bytes"})
            assert ws.receive_json()["notification"]["message"] == "After bytes"
            assert container.broker.connection_count == 1

    def test_invalid_query_token_is_refused(self, client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws?token=garbage"):
                pass
        assert exc_info.value.code == 1008

    def test_disconnect_unregisters(self, client, wait_for_sockets):
        with client.websocket_connect("/ws"):
            wait_for_sockets(1)
        wait_for_sockets(0)
        response = client.post("/api/notifications", json={"message": "Nobody listening"})
        assert response.status_code == 201
