"""Errors raised by the domain and application layers."""

from __future__ import annotations

from collections.abc import Iterable


class InvalidCredentialsError(ValueError):
    """Raised when a bearer credential is missing, malformed or expired."""


class NotificationNotFoundError(LookupError):
    """Raised when a notification does not exist for the requesting recipient."""

    def __init__(self, notification_id: int) -> None:
        super().__init__(f"Notification {notification_id} not found")
        self.notification_id = notification_id


class TicketNotFoundError(LookupError):
    """Raised when a ticket cannot be located."""

    def __init__(self, ticket_id: int) -> None:
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class NotificationPersistenceError(RuntimeError):
    """Raised when durable notification rows could not be written.

    Rows for the remaining recipients of the same announcement have already
    been stored and pushed when this is raised.
    """

    def __init__(self, recipient_ids: Iterable[int]) -> None:
        self.recipient_ids = tuple(recipient_ids)
        joined = ", ".join(str(recipient_id) for recipient_id in self.recipient_ids)
        super().__init__(f"Could not persist notifications for recipients: {joined}")


__all__ = [
    "InvalidCredentialsError",
    "NotificationNotFoundError",
    "NotificationPersistenceError",
    "TicketNotFoundError",
]
