from .auth import Token
from .notification import (
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationUpdateResult,
    UnreadCount,
)
from .ticket import CommentCreate, CommentRead, TicketCreate, TicketRead, TicketUpdate

__all__ = [
    "Token",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationUpdateResult",
    "UnreadCount",
    "CommentCreate",
    "CommentRead",
    "TicketCreate",
    "TicketRead",
    "TicketUpdate",
]
