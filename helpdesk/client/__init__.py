"""Reference client implementing the reconnect and reconciliation contract."""

from .client import AuthenticationRequired, NotificationClient, ReconnectExhausted
from .inbox import NotificationInbox
from .policy import ReconnectPolicy

__all__ = [
    "AuthenticationRequired",
    "NotificationClient",
    "NotificationInbox",
    "ReconnectExhausted",
    "ReconnectPolicy",
]
