"""Domain entities exposed by the application."""

from .comment import Comment
from .event import RealtimeEvent
from .identity import Identity
from .notification import Notification
from .ticket import (
    TICKET_PRIORITIES,
    TICKET_PRIORITY_MEDIUM,
    TICKET_STATUS_CLOSED,
    TICKET_STATUS_IN_PROGRESS,
    TICKET_STATUS_OPEN,
    TICKET_STATUS_RESOLVED,
    TICKET_STATUSES,
    Ticket,
)
from .user import ROLE_ADMIN, ROLE_AGENT, ROLE_USER, ROLES, User

__all__ = [
    "Comment",
    "RealtimeEvent",
    "Identity",
    "Notification",
    "Ticket",
    "TICKET_PRIORITIES",
    "TICKET_PRIORITY_MEDIUM",
    "TICKET_STATUSES",
    "TICKET_STATUS_OPEN",
    "TICKET_STATUS_IN_PROGRESS",
    "TICKET_STATUS_RESOLVED",
    "TICKET_STATUS_CLOSED",
    "User",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_AGENT",
    "ROLE_USER",
]
