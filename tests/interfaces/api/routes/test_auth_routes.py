"""Tests for the token endpoint."""

from helpdesk.infrastructure.security import authenticate_token


def test_login_returns_token_for_the_user(client, make_user, user_password) -> None:
    user = make_user("Login", role="AGENT")

    response = client.post(
        "/auth/token", data={"username": user.email, "password": user_password}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == user.id
    assert body["role"] == "AGENT"
    identity = authenticate_token(body["access_token"])
    assert (identity.id, identity.role) == (user.id, "AGENT")


def test_login_with_wrong_password_is_rejected(client, make_user) -> None:
    user = make_user("Wrong")

    response = client.post("/auth/token", data={"username": user.email, "password": "nope"})

    assert response.status_code == 401


def test_inactive_user_cannot_log_in(client, make_user, user_password) -> None:
    user = make_user("Gone", is_active=False)

    response = client.post(
        "/auth/token", data={"username": user.email, "password": user_password}
    )

    assert response.status_code == 403
