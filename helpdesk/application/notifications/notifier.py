"""Bridge between synchronous use cases and the event dispatcher."""

from __future__ import annotations

import logging
from typing import Any, Callable

from helpdesk.domain.entities import Notification, RealtimeEvent
from helpdesk.domain.exceptions import NotificationPersistenceError
from helpdesk.infrastructure.realtime import EventDispatcher, call_from_thread

from .rules import RecipientContext, recipients_for

logger = logging.getLogger(__name__)


class Notifier:
    """Emit the notifications and realtime events of a business mutation.

    Use cases run in worker threads; ``runner`` executes dispatcher calls on
    the event loop and waits for them. A notification that cannot be stored
    is logged and skipped: it never fails the mutation that triggered it.
    """

    def __init__(
        self,
        dispatcher: EventDispatcher,
        runner: Callable[..., Any] = call_from_thread,
    ) -> None:
        self._dispatcher = dispatcher
        self._runner = runner

    def notify(
        self,
        notification_type: str,
        context: RecipientContext,
        *,
        title: str,
        message: str,
        link: str | None = None,
    ) -> list[Notification]:
        recipients = recipients_for(notification_type, context)
        if not recipients:
            return []
        try:
            return self._runner(
                self._dispatcher.announce,
                recipients,
                title,
                message,
                notification_type,
                link,
            )
        except NotificationPersistenceError as exc:
            logger.warning(
                "%s notification for ticket %s not stored for users %s",
                notification_type,
                context.ticket.id,
                list(exc.recipient_ids),
                exc_info=True,
            )
            return []

    def broadcast(
        self, event_type: str, context: RecipientContext, payload: dict[str, Any]
    ) -> int:
        recipients = recipients_for(event_type, context)
        if not recipients:
            return 0
        event = RealtimeEvent(type=event_type, recipient_ids=tuple(recipients), payload=payload)
        return self._runner(self._dispatcher.publish, event)


__all__ = ["Notifier"]
