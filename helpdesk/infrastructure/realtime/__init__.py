"""Realtime notification delivery for the infrastructure layer."""

from .connection import Connection
from .dispatcher import (
    NOTIFICATION_EVENT,
    EventDispatcher,
    call_from_thread,
    unique_recipients,
)
from .hub import RealtimeHub, build_realtime_hub
from .registry import ConnectionRegistry
from .serializers import serialize_comment, serialize_notification, serialize_ticket
from .sessions import SessionManager, extract_token

__all__ = [
    "Connection",
    "ConnectionRegistry",
    "EventDispatcher",
    "NOTIFICATION_EVENT",
    "RealtimeHub",
    "SessionManager",
    "build_realtime_hub",
    "call_from_thread",
    "extract_token",
    "serialize_comment",
    "serialize_notification",
    "serialize_ticket",
    "unique_recipients",
]
