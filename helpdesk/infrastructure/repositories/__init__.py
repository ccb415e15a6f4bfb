"""Repository implementations for infrastructure layer."""

from .comment_repository import CommentRepository
from .notification_repository import NotificationRepository, NotificationStore
from .ticket_repository import TicketRepository
from .user_repository import UserRepository

__all__ = [
    "CommentRepository",
    "NotificationRepository",
    "NotificationStore",
    "TicketRepository",
    "UserRepository",
]
