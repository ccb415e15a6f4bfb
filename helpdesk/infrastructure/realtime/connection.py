"""A live websocket session and its outbound queue."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import uuid4

import anyio
from fastapi import WebSocket, WebSocketDisconnect

from helpdesk.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class Connection:
    """Transport session owned by the session manager.

    Pushes are never written to the socket by the caller. They are appended
    to a bounded outbox and the connection's own sender task (:meth:`pump`)
    writes them in FIFO order, so a slow or dead socket cannot stall the code
    that announced the event.
    """

    def __init__(
        self,
        websocket: WebSocket,
        *,
        owner_id: int,
        role: str,
        outbox_size: int = 100,
        connection_id: str | None = None,
        connected_at: datetime | None = None,
    ) -> None:
        self.connection_id = connection_id or uuid4().hex
        self.owner_id = owner_id
        self.role = role
        self.connected_at = connected_at or now_in_app_timezone()
        self._websocket = websocket
        self._outbox, self._inbox = anyio.create_memory_object_stream(
            max_buffer_size=outbox_size
        )
        self._closed = False

    def __repr__(self) -> str:
        return f"<Connection {self.connection_id} owner={self.owner_id}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, message: dict[str, Any]) -> bool:
        """Queue ``message`` for delivery; return ``False`` when it was dropped."""

        if self._closed:
            return False
        try:
            self._outbox.send_nowait(message)
        except anyio.WouldBlock:
            logger.warning(
                "Outbox full for connection %s of user %s, dropping %r",
                self.connection_id,
                self.owner_id,
                message.get("type"),
            )
            return False
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            return False
        return True

    async def pump(self) -> None:
        """Write queued messages to the socket until it fails or is closed."""

        async with self._inbox:
            async for message in self._inbox:
                if not await self._send(message):
                    self.close()
                    return

    async def _send(self, message: dict[str, Any]) -> bool:
        try:
            await self._websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            logger.debug(
                "Push %r to connection %s failed: %s",
                message.get("type"),
                self.connection_id,
                exc,
            )
            return False
        return True

    def close(self) -> None:
        """Stop accepting new pushes; the sender drains what is already queued."""

        if self._closed:
            return
        self._closed = True
        self._outbox.close()


__all__ = ["Connection"]
