"""Public helpers for emitting domain notifications."""

from .notifier import Notifier
from .rules import (
    COMMENT_ADDED,
    COMMENT_ADDED_EVENT,
    RECIPIENT_RULES,
    STATUS_CHANGED,
    TICKET_ASSIGNED,
    TICKET_CREATED_EVENT,
    TICKET_UPDATED_EVENT,
    RecipientContext,
    recipients_for,
)

__all__ = [
    "Notifier",
    "RecipientContext",
    "RECIPIENT_RULES",
    "recipients_for",
    "TICKET_CREATED_EVENT",
    "TICKET_UPDATED_EVENT",
    "COMMENT_ADDED_EVENT",
    "TICKET_ASSIGNED",
    "COMMENT_ADDED",
    "STATUS_CHANGED",
]
