"""JSON representations of entities pushed over websockets."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from helpdesk.domain.entities import Comment, Notification, Ticket


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "link": notification.link,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


def serialize_ticket(ticket: Ticket) -> dict[str, Any]:
    payload = asdict(ticket)
    _normalize_datetime_values(payload)
    return payload


def serialize_comment(comment: Comment) -> dict[str, Any]:
    payload = asdict(comment)
    _normalize_datetime_values(payload)
    return payload


def _normalize_datetime_values(data: dict[str, object] | list[object]) -> None:
    """Convert ``datetime`` instances nested inside ``data`` into ISO strings."""

    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, (dict, list)):
                _normalize_datetime_values(value)
    elif isinstance(data, list):
        for index, item in enumerate(data):
            if isinstance(item, datetime):
                data[index] = item.isoformat()
            elif isinstance(item, (dict, list)):
                _normalize_datetime_values(item)


__all__ = ["serialize_notification", "serialize_ticket", "serialize_comment"]
