"""Shared fixtures: environment, a clean database per test and user helpers."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"helpdesk_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["HANDSHAKE_TIMEOUT_SECONDS"] = "0.5"
os.environ["APP_TIMEZONE"] = "UTC"

from helpdesk.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from helpdesk.domain.entities import Identity, User  # noqa: E402
from helpdesk.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from helpdesk.infrastructure.models import UserModel  # noqa: E402
from helpdesk.infrastructure.repositories import UserRepository  # noqa: E402
from helpdesk.infrastructure.security import (  # noqa: E402
    create_identity_token,
    get_password_hash,
)

TEST_PASSWORD = "Secret123"
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    return SessionLocal


@pytest.fixture
def db_session():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def make_user():
    """Insert users directly, reusing one password hash to keep tests fast."""

    def _make_user(name: str, role: str = "USER", *, is_active: bool = True) -> User:
        with SessionLocal() as session:
            model = UserModel(
                name=name,
                email=f"{name.lower()}@example.com",
                password=_PASSWORD_HASH,
                role=role,
                is_active=is_active,
            )
            session.add(model)
            session.commit()
            return UserRepository(session).get(model.id)

    return _make_user


def _token_for(user: User, **kwargs) -> str:
    return create_identity_token(Identity(id=user.id, role=user.role), **kwargs)


@pytest.fixture
def token_for():
    """Return a helper issuing bearer tokens for a user."""

    return _token_for


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {_token_for(user)}"}

    return _auth_headers


@pytest.fixture
def client():
    """Return a test client bound to a freshly created application."""

    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def user_password() -> str:
    """Plain password shared by every user created with ``make_user``."""

    return TEST_PASSWORD
