"""Tests for credential verification."""

from datetime import timedelta

import pytest
from jose import jwt

from helpdesk.config import get_settings
from helpdesk.domain.entities import Identity
from helpdesk.domain.exceptions import InvalidCredentialsError
from helpdesk.infrastructure.security import (
    ALGORITHM,
    authenticate_token,
    create_access_token,
    create_identity_token,
    get_password_hash,
    verify_password,
)


def test_valid_token_yields_identity() -> None:
    token = create_identity_token(Identity(id=12, role="agent"))

    assert authenticate_token(token) == Identity(id=12, role="AGENT")


def test_expired_token_is_rejected() -> None:
    token = create_identity_token(
        Identity(id=12, role="USER"), expires_delta=timedelta(seconds=-5)
    )

    with pytest.raises(InvalidCredentialsError):
        authenticate_token(token)


def test_token_signed_with_another_key_is_rejected() -> None:
    token = jwt.encode({"sub": "1", "role": "USER"}, "other-secret", algorithm=ALGORITHM)

    with pytest.raises(InvalidCredentialsError):
        authenticate_token(token)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_missing_or_garbled_token_is_rejected(token) -> None:
    with pytest.raises(InvalidCredentialsError):
        authenticate_token(token)


@pytest.mark.parametrize(
    "claims",
    [
        {"sub": "abc", "role": "USER"},
        {"sub": "0", "role": "USER"},
        {"sub": "5", "role": "ROOT"},
        {"sub": "5"},
    ],
)
def test_malformed_claims_are_rejected(claims) -> None:
    with pytest.raises(InvalidCredentialsError):
        authenticate_token(create_access_token(claims))


def test_token_without_expiry_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "5", "role": "USER"}, get_settings().secret_key, algorithm=ALGORITHM
    )

    with pytest.raises(InvalidCredentialsError):
        authenticate_token(token)


def test_password_hash_round_trip() -> None:
    hashed = get_password_hash("Secret123")

    assert hashed != "Secret123"
    assert verify_password("Secret123", hashed)
    assert not verify_password("wrong", hashed)
