"""End-to-end tests for the realtime notification socket."""

from datetime import timedelta

import pytest
from fastapi import WebSocketDisconnect, status


def _hub(client):
    return client.app.state.realtime


def _announce(client, recipient_ids, title="Ticket Atribuído", type="TICKET_ASSIGNED"):
    hub = _hub(client)
    return client.portal.call(
        hub.dispatcher.announce, recipient_ids, title, "Mensagem", type, "/tickets/1"
    )


def test_expired_token_is_refused_before_registration(client, make_user, token_for) -> None:
    user = make_user("Expired")
    token = token_for(user, expires_delta=timedelta(seconds=-1))

    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect(f"/notifications/ws?token={token}"):
            pass

    assert excinfo.value.code == status.WS_1008_POLICY_VIOLATION
    assert _hub(client).registry.connection_count() == 0


def test_garbled_token_is_refused(client) -> None:
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/notifications/ws?token=garbage"):
            pass

    assert excinfo.value.code == status.WS_1008_POLICY_VIOLATION


def test_valid_token_registers_the_connection(client, make_user, token_for) -> None:
    user = make_user("Online")
    hub = _hub(client)

    with client.websocket_connect(f"/notifications/ws?token={token_for(user)}") as websocket:
        greeting = websocket.receive_json()
        assert greeting["type"] == "connected"
        assert greeting["data"]["user_id"] == user.id
        assert hub.registry.is_online(user.id)

    assert not hub.registry.is_online(user.id)
    assert hub.registry.connection_count() == 0


def test_authorization_header_is_accepted(client, make_user, auth_headers) -> None:
    user = make_user("Header")

    with client.websocket_connect("/notifications/ws", headers=auth_headers(user)) as websocket:
        assert websocket.receive_json()["type"] == "connected"


def test_first_message_authentication(client, make_user, token_for) -> None:
    user = make_user("Later")

    with client.websocket_connect("/notifications/ws") as websocket:
        websocket.send_json({"type": "auth", "token": token_for(user)})
        greeting = websocket.receive_json()

    assert greeting["type"] == "connected"
    assert greeting["data"]["user_id"] == user.id


def test_silent_socket_is_closed_after_the_handshake_timeout(client) -> None:
    with client.websocket_connect("/notifications/ws") as websocket:
        with pytest.raises(WebSocketDisconnect) as excinfo:
            websocket.receive_json()

    assert excinfo.value.code == status.WS_1008_POLICY_VIOLATION
    assert _hub(client).registry.connection_count() == 0


def test_announce_pushes_to_connected_recipient(client, make_user, token_for) -> None:
    user = make_user("Agent", role="AGENT")

    with client.websocket_connect(f"/notifications/ws?token={token_for(user)}") as websocket:
        websocket.receive_json()
        saved = _announce(client, [user.id])
        pushed = websocket.receive_json()

    assert pushed["type"] == "notification"
    assert pushed["data"]["id"] == saved[0].id
    assert pushed["data"]["title"] == "Ticket Atribuído"
    assert pushed["data"]["read"] is False


def test_offline_recipient_finds_notification_on_next_fetch(
    client, make_user, auth_headers
) -> None:
    user = make_user("Away")
    saved = _announce(client, [user.id])

    response = client.get("/notifications/", headers=auth_headers(user))

    assert response.status_code == 200
    rows = response.json()
    assert rows[0]["id"] == saved[0].id
    assert rows[0]["read"] is False


def test_every_tab_receives_push_and_read_state_is_shared(
    client, make_user, token_for, auth_headers
) -> None:
    user = make_user("Tabs")
    url = f"/notifications/ws?token={token_for(user)}"

    with client.websocket_connect(url) as first, client.websocket_connect(url) as second:
        first.receive_json()
        second.receive_json()
        assert len(_hub(client).registry.sessions_for(user.id)) == 2

        saved = _announce(client, [user.id])
        assert first.receive_json()["data"]["id"] == saved[0].id
        assert second.receive_json()["data"]["id"] == saved[0].id

        response = client.patch(
            f"/notifications/{saved[0].id}/read", headers=auth_headers(user)
        )
        assert response.status_code == 200

    rows = client.get("/notifications/", headers=auth_headers(user)).json()
    assert rows[0]["read"] is True


def test_ack_frame_marks_notifications_read(client, make_user, token_for, auth_headers) -> None:
    user = make_user("Acker")
    saved = _announce(client, [user.id])

    with client.websocket_connect(f"/notifications/ws?token={token_for(user)}") as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "ack", "ids": [saved[0].id]})
        ack = websocket.receive_json()

    assert ack == {"type": "ack", "data": {"ids": [saved[0].id], "updated": 1}}
    unread = client.get("/notifications/unread-count", headers=auth_headers(user)).json()
    assert unread == {"unread": 0}


def test_malformed_frames_do_not_drop_the_session(client, make_user, token_for) -> None:
    user = make_user("Noisy")

    with client.websocket_connect(f"/notifications/ws?token={token_for(user)}") as websocket:
        websocket.receive_json()
        websocket.send_text("not json")
        websocket.send_json(["not", "a", "dict"])
        saved = _announce(client, [user.id])
        assert websocket.receive_json()["data"]["id"] == saved[0].id
