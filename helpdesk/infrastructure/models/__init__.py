"""ORM models used by the application infrastructure."""

from .comment import CommentModel
from .notification import NotificationModel
from .ticket import TicketModel
from .user import UserModel

__all__ = [
    "CommentModel",
    "NotificationModel",
    "TicketModel",
    "UserModel",
]
