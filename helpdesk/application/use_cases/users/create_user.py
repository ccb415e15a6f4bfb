"""Use case for creating users."""

from sqlalchemy.orm import Session

from helpdesk.domain.entities import ROLES, User
from helpdesk.infrastructure.repositories import UserRepository
from helpdesk.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if repository.get_by_email(email):
        msg = "O email já está registado"
        raise ValueError(msg)

    role = role.upper()
    if role not in ROLES:
        raise ValueError("Perfil não permitido")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        role=role,
        is_active=True,
        created_at=None,
    )
    return repository.create(user)
