"""Domain entity representing a support ticket."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

TICKET_STATUS_OPEN = "OPEN"
TICKET_STATUS_IN_PROGRESS = "IN_PROGRESS"
TICKET_STATUS_RESOLVED = "RESOLVED"
TICKET_STATUS_CLOSED = "CLOSED"
TICKET_STATUSES = (
    TICKET_STATUS_OPEN,
    TICKET_STATUS_IN_PROGRESS,
    TICKET_STATUS_RESOLVED,
    TICKET_STATUS_CLOSED,
)

TICKET_PRIORITY_MEDIUM = "MEDIUM"
TICKET_PRIORITIES = ("LOW", TICKET_PRIORITY_MEDIUM, "HIGH", "URGENT")


@dataclass
class Ticket:
    """Support request opened by a user and optionally assigned to an agent."""

    id: int | None
    title: str
    description: str
    status: str
    priority: str
    creator_id: int
    assignee_id: int | None
    created_at: datetime | None
    updated_at: datetime | None


__all__ = [
    "Ticket",
    "TICKET_STATUSES",
    "TICKET_STATUS_OPEN",
    "TICKET_STATUS_IN_PROGRESS",
    "TICKET_STATUS_RESOLVED",
    "TICKET_STATUS_CLOSED",
    "TICKET_PRIORITIES",
    "TICKET_PRIORITY_MEDIUM",
]
