"""Fan business events out to the durable store and to live sessions."""

from __future__ import annotations

import copy
import inspect
import logging
from collections.abc import Iterable
from functools import partial
from typing import Any, Callable, Protocol, TypeVar

import anyio
from anyio import from_thread

from helpdesk.domain.entities import Notification, RealtimeEvent
from helpdesk.domain.exceptions import NotificationPersistenceError

from .registry import ConnectionRegistry
from .serializers import serialize_notification

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"

T = TypeVar("T")


class NotificationWriter(Protocol):
    def create_notification(
        self,
        recipient_id: int,
        title: str,
        message: str,
        type: str,
        link: str | None = None,
    ) -> Notification: ...


def unique_recipients(recipient_ids: Iterable[int | None]) -> list[int]:
    """Drop empty and repeated ids while keeping the caller's order."""

    unique: list[int] = []
    seen: set[int] = set()
    for recipient_id in recipient_ids:
        if not recipient_id or recipient_id in seen:
            continue
        seen.add(recipient_id)
        unique.append(recipient_id)
    return unique


class EventDispatcher:
    """Single entry point for announcing that something happened.

    ``announce`` writes one durable notification per recipient and only then
    pushes it to the recipient's live connections. Pushes are queued on each
    connection and sent by its own task, so they never block or fail the
    announcement. Must be used from the event loop thread; sync code calls it
    through :func:`call_from_thread`.
    """

    def __init__(self, registry: ConnectionRegistry, store: NotificationWriter) -> None:
        self._registry = registry
        self._store = store

    async def announce(
        self,
        recipient_ids: Iterable[int | None],
        title: str,
        message: str,
        type: str,
        link: str | None = None,
    ) -> list[Notification]:
        """Persist and push a notification for every recipient.

        Writes for different recipients run concurrently. Raises
        :class:`NotificationPersistenceError` when any write failed, after the
        remaining recipients were handled.
        """

        recipients = unique_recipients(recipient_ids)
        if not recipients:
            return []

        saved: dict[int, Notification] = {}
        failures: dict[int, BaseException] = {}

        async def deliver(recipient_id: int) -> None:
            write = partial(
                self._store.create_notification, recipient_id, title, message, type, link
            )
            try:
                notification = await anyio.to_thread.run_sync(write)
            except Exception as exc:
                logger.warning(
                    "Could not persist %s notification for user %s",
                    type,
                    recipient_id,
                    exc_info=True,
                )
                failures[recipient_id] = exc
                return

            saved[recipient_id] = notification
            self.push(
                recipient_id,
                {"type": NOTIFICATION_EVENT, "data": serialize_notification(notification)},
            )

        async with anyio.create_task_group() as task_group:
            for recipient_id in recipients:
                task_group.start_soon(deliver, recipient_id)

        if failures:
            failed = [recipient_id for recipient_id in recipients if recipient_id in failures]
            raise NotificationPersistenceError(failed) from failures[failed[0]]

        return [saved[recipient_id] for recipient_id in recipients]

    def publish(self, event: RealtimeEvent) -> int:
        """Push an ephemeral ``event`` to its recipients' live connections.

        Returns the number of connections the event was queued for.
        """

        message = {"type": event.type, "data": copy.deepcopy(event.payload)}
        delivered = 0
        for recipient_id in unique_recipients(event.recipient_ids):
            delivered += self.push(recipient_id, message)
        return delivered

    def push(self, owner_id: int, message: dict[str, Any]) -> int:
        """Queue ``message`` on every live connection of ``owner_id``."""

        connections = self._registry.sessions_for(owner_id)
        if not connections:
            return 0

        delivered = 0
        for connection in connections:
            if connection.enqueue(message):
                delivered += 1
            else:
                logger.debug(
                    "Dropped %r push for user %s on %r",
                    message.get("type"),
                    owner_id,
                    connection,
                )
        return delivered


def call_from_thread(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run ``func`` on the event loop from a worker thread and wait for it.

    Sync route handlers run in anyio worker threads; this is how they reach
    the dispatcher, which lives on the loop.
    """

    if inspect.iscoroutinefunction(func):
        return from_thread.run(partial(func, *args, **kwargs))
    return from_thread.run_sync(partial(func, *args, **kwargs))


__all__ = [
    "EventDispatcher",
    "NOTIFICATION_EVENT",
    "NotificationWriter",
    "call_from_thread",
    "unique_recipients",
]
