"""Local view of a user's notifications."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class NotificationInbox:
    """Client-side notification list.

    The REST listing is the source of truth and replaces the local state on
    every (re)connect. Pushed rows are only an incremental hint applied on
    top of it, so anything missed while offline reappears on the next
    :meth:`reconcile`.
    """

    def __init__(self) -> None:
        self._items: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def notifications(self) -> tuple[dict[str, Any], ...]:
        return tuple(dict(item) for item in self._items)

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self._items if not item.get("read"))

    def reconcile(self, rows: Iterable[Mapping[str, Any]]) -> None:
        self._items = [dict(row) for row in rows]

    def apply_push(self, row: Mapping[str, Any]) -> bool:
        """Prepend a pushed row unless it is already known."""

        if any(item.get("id") == row.get("id") for item in self._items):
            return False
        self._items.insert(0, dict(row))
        return True

    def mark_read(self, notification_id: int) -> bool:
        for item in self._items:
            if item.get("id") == notification_id:
                item["read"] = True
                return True
        return False

    def mark_all_read(self) -> None:
        for item in self._items:
            item["read"] = True


__all__ = ["NotificationInbox"]
