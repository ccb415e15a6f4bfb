"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Durable message addressed to a single recipient."""

    id: int | None
    recipient_id: int
    title: str
    message: str
    type: str
    link: str | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification"]
