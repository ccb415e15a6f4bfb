"""Process-scoped wiring of the realtime components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from helpdesk.config import Settings
from helpdesk.infrastructure.repositories import NotificationStore

from .dispatcher import EventDispatcher
from .registry import ConnectionRegistry
from .sessions import SessionManager


@dataclass
class RealtimeHub:
    """Components that share one connection registry for the process lifetime."""

    registry: ConnectionRegistry
    store: NotificationStore
    dispatcher: EventDispatcher
    sessions: SessionManager


def build_realtime_hub(
    session_factory: Callable[[], Session], settings: Settings
) -> RealtimeHub:
    """Create an empty registry and the dispatcher and session manager using it."""

    registry = ConnectionRegistry()
    store = NotificationStore(session_factory)
    return RealtimeHub(
        registry=registry,
        store=store,
        dispatcher=EventDispatcher(registry, store),
        sessions=SessionManager(
            registry,
            store,
            handshake_timeout=settings.handshake_timeout_seconds,
            outbox_size=settings.connection_outbox_size,
        ),
    )


__all__ = ["RealtimeHub", "build_realtime_hub"]
