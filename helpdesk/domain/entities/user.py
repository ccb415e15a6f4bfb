"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "ADMIN"
ROLE_AGENT = "AGENT"
ROLE_USER = "USER"
ROLES = (ROLE_ADMIN, ROLE_AGENT, ROLE_USER)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: str
    is_active: bool
    created_at: datetime | None


__all__ = ["User", "ROLES", "ROLE_ADMIN", "ROLE_AGENT", "ROLE_USER"]
