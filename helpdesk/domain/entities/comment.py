"""Domain entity representing a ticket comment."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Message posted on a ticket by one of its participants."""

    id: int | None
    ticket_id: int
    user_id: int
    content: str
    created_at: datetime | None


__all__ = ["Comment"]
