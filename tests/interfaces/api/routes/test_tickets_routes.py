"""Ticket mutations and the notifications they emit."""

import pytest


def _socket_url(token: str) -> str:
    return f"/notifications/ws?token={token}"


def _sentinel(client, user_id: int) -> None:
    client.portal.call(client.app.state.realtime.dispatcher.push, user_id, {"type": "sentinel"})


@pytest.fixture
def people(make_user):
    return {
        "creator": make_user("Creator"),
        "agent": make_user("Agent", role="AGENT"),
        "admin": make_user("Admin", role="ADMIN"),
    }


@pytest.fixture
def ticket(client, people, auth_headers):
    response = client.post(
        "/tickets/",
        json={"title": "Impressora", "description": "Não imprime"},
        headers=auth_headers(people["creator"]),
    )
    assert response.status_code == 201
    return response.json()


def test_create_ticket_with_unknown_assignee_is_rejected(client, people, auth_headers) -> None:
    response = client.post(
        "/tickets/",
        json={"title": "X", "description": "Y", "assignee_id": 999},
        headers=auth_headers(people["creator"]),
    )

    assert response.status_code == 400


def test_new_ticket_is_pushed_to_admins(client, people, token_for, auth_headers) -> None:
    with client.websocket_connect(_socket_url(token_for(people["admin"]))) as websocket:
        websocket.receive_json()
        response = client.post(
            "/tickets/",
            json={"title": "Rede", "description": "Sem ligação"},
            headers=auth_headers(people["creator"]),
        )
        event = websocket.receive_json()

    assert event["type"] == "ticket:created"
    assert event["data"]["id"] == response.json()["id"]


def test_assignment_pushes_notification_then_update(
    client, people, ticket, token_for, auth_headers
) -> None:
    agent = people["agent"]

    with client.websocket_connect(_socket_url(token_for(agent))) as websocket:
        websocket.receive_json()
        response = client.patch(
            f"/tickets/{ticket['id']}",
            json={"assignee_id": agent.id},
            headers=auth_headers(people["admin"]),
        )
        assert response.status_code == 200
        notification = websocket.receive_json()
        update = websocket.receive_json()

    assert notification["type"] == "notification"
    assert notification["data"]["type"] == "TICKET_ASSIGNED"
    assert notification["data"]["link"] == f"/tickets/{ticket['id']}"
    assert update["type"] == "ticket:updated"
    assert update["data"]["assignee_id"] == agent.id

    rows = client.get("/notifications/", headers=auth_headers(agent)).json()
    assert [row["type"] for row in rows] == ["TICKET_ASSIGNED"]


def test_ticket_update_is_not_pushed_to_unrelated_admins(
    client, people, ticket, token_for, auth_headers
) -> None:
    admin = people["admin"]

    with client.websocket_connect(_socket_url(token_for(admin))) as websocket:
        websocket.receive_json()
        client.patch(
            f"/tickets/{ticket['id']}",
            json={"priority": "HIGH"},
            headers=auth_headers(admin),
        )
        _sentinel(client, admin.id)

        assert websocket.receive_json() == {"type": "sentinel"}


def test_status_change_notifies_the_creator(
    client, people, ticket, token_for, auth_headers
) -> None:
    creator = people["creator"]

    with client.websocket_connect(_socket_url(token_for(creator))) as websocket:
        websocket.receive_json()
        client.patch(
            f"/tickets/{ticket['id']}",
            json={"status": "in_progress"},
            headers=auth_headers(people["agent"]),
        )
        notification = websocket.receive_json()
        update = websocket.receive_json()

    assert notification["data"]["type"] == "STATUS_CHANGED"
    assert notification["data"]["message"].endswith("IN_PROGRESS")
    assert update["type"] == "ticket:updated"


def test_comment_notifies_everyone_but_the_author(
    client, people, ticket, token_for, auth_headers
) -> None:
    creator, agent = people["creator"], people["agent"]
    client.patch(
        f"/tickets/{ticket['id']}",
        json={"assignee_id": agent.id},
        headers=auth_headers(people["admin"]),
    )

    creator_url = _socket_url(token_for(creator))
    agent_url = _socket_url(token_for(agent))

    with client.websocket_connect(creator_url) as creator_socket, client.websocket_connect(
        agent_url
    ) as agent_socket:
        creator_socket.receive_json()
        agent_socket.receive_json()

        response = client.post(
            f"/tickets/{ticket['id']}/comments",
            json={"content": "Já reiniciei"},
            headers=auth_headers(creator),
        )
        assert response.status_code == 201

        notification = agent_socket.receive_json()
        event = agent_socket.receive_json()
        _sentinel(client, creator.id)
        assert creator_socket.receive_json() == {"type": "sentinel"}

    assert notification["data"]["type"] == "COMMENT_ADDED"
    assert event["type"] == "comment:added"
    assert event["data"]["comment"]["content"] == "Já reiniciei"
    creator_rows = client.get("/notifications/", headers=auth_headers(creator)).json()
    assert [row["type"] for row in creator_rows] == []


def test_notification_store_failure_does_not_fail_the_mutation(
    client, people, ticket, auth_headers, monkeypatch
) -> None:
    store = client.app.state.realtime.store

    def broken(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(store, "create_notification", broken)

    response = client.patch(
        f"/tickets/{ticket['id']}",
        json={"assignee_id": people["agent"].id},
        headers=auth_headers(people["admin"]),
    )

    assert response.status_code == 200
    assert response.json()["assignee_id"] == people["agent"].id
    assert client.get("/notifications/", headers=auth_headers(people["agent"])).json() == []


def test_updating_missing_ticket_returns_not_found(client, people, auth_headers) -> None:
    response = client.patch(
        "/tickets/404", json={"status": "CLOSED"}, headers=auth_headers(people["admin"])
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Ticket não encontrado"


def test_empty_comment_is_rejected(client, people, ticket, auth_headers) -> None:
    response = client.post(
        f"/tickets/{ticket['id']}/comments",
        json={"content": "   "},
        headers=auth_headers(people["creator"]),
    )

    assert response.status_code == 400
