"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Identificadores de notificações")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    title: str
    message: str
    type: str
    link: str | None = None
    read: bool
    created_at: datetime


class NotificationUpdateResult(BaseModel):
    updated: int


class UnreadCount(BaseModel):
    unread: int


__all__ = [
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationUpdateResult",
    "UnreadCount",
]
