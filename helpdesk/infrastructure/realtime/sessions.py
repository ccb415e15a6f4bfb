"""Websocket lifecycle: handshake, registration and guaranteed cleanup."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import anyio
from fastapi import WebSocket, WebSocketDisconnect, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.websockets import WebSocketState

from helpdesk.domain.entities import Identity
from helpdesk.domain.exceptions import InvalidCredentialsError
from helpdesk.infrastructure.repositories import NotificationStore
from helpdesk.infrastructure.security import authenticate_token

from .connection import Connection
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)

AUTH_MESSAGE = "auth"
ACK_MESSAGE = "ack"
CONNECTED_EVENT = "connected"


def extract_token(websocket: WebSocket) -> str | None:
    """Return the bearer credential supplied when the socket was opened.

    Browsers cannot set headers on a websocket upgrade, so the ``token`` query
    parameter is checked first; an ``Authorization: Bearer`` header is
    accepted for non-browser clients.
    """

    token = (websocket.query_params.get("token") or "").strip()
    if token:
        return token

    scheme, _, credential = websocket.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credential.strip():
        return credential.strip()
    return None


class SessionManager:
    """Authorize websocket connections and track them in the registry."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        store: NotificationStore,
        *,
        handshake_timeout: float = 10.0,
        outbox_size: int = 100,
    ) -> None:
        self._registry = registry
        self._store = store
        self._handshake_timeout = handshake_timeout
        self._outbox_size = outbox_size

    async def serve(self, websocket: WebSocket) -> None:
        """Run a connection from handshake to close."""

        identity = await self.handshake(websocket)
        if identity is None:
            return

        if websocket.application_state == WebSocketState.CONNECTING:
            await websocket.accept()

        async with self.session(websocket, identity) as connection:
            async with anyio.create_task_group() as task_group:
                task_group.start_soon(connection.pump)
                connection.enqueue(
                    {
                        "type": CONNECTED_EVENT,
                        "data": {
                            "user_id": identity.id,
                            "connection_id": connection.connection_id,
                        },
                    }
                )
                await self._receive_loop(websocket, connection)
                task_group.cancel_scope.cancel()

    async def handshake(self, websocket: WebSocket) -> Identity | None:
        """Resolve the identity of ``websocket`` or refuse it.

        A refused socket is closed with ``1008`` and never reaches the
        registry.
        """

        token = extract_token(websocket)
        if token is None:
            await websocket.accept()
            token = await self._await_auth_message(websocket)
            if token is None:
                await self._refuse(websocket, "no credential presented")
                return None

        try:
            return authenticate_token(token)
        except InvalidCredentialsError as exc:
            await self._refuse(websocket, str(exc))
            return None

    @asynccontextmanager
    async def session(
        self, websocket: WebSocket, identity: Identity
    ) -> AsyncIterator[Connection]:
        """Register a connection for ``identity`` for the duration of the block.

        Deregistration happens on every exit path: client close, failed
        liveness checks, server-side errors and cancellation.
        """

        connection = Connection(
            websocket,
            owner_id=identity.id,
            role=identity.role,
            outbox_size=self._outbox_size,
        )
        self._registry.register(identity.id, connection)
        logger.info(
            "User %s connected (%s), %d live connection(s)",
            identity.id,
            connection.connection_id,
            self._registry.connection_count(),
        )
        try:
            yield connection
        finally:
            connection.close()
            self._registry.deregister(connection)
            logger.info(
                "User %s disconnected (%s), %d live connection(s)",
                identity.id,
                connection.connection_id,
                self._registry.connection_count(),
            )

    async def _await_auth_message(self, websocket: WebSocket) -> str | None:
        try:
            with anyio.fail_after(self._handshake_timeout):
                message = await websocket.receive_json()
        except TimeoutError:
            logger.warning(
                "Websocket handshake timed out after %.1fs", self._handshake_timeout
            )
            return None
        except WebSocketDisconnect:
            return None
        except (ValueError, KeyError):
            return None

        if not isinstance(message, dict) or message.get("type") != AUTH_MESSAGE:
            return None
        token = message.get("token")
        if not isinstance(token, str) or not token.strip():
            return None
        return token.strip()

    async def _refuse(self, websocket: WebSocket, reason: str) -> None:
        logger.warning("Refusing websocket connection from %s: %s", websocket.client, reason)
        if websocket.client_state == WebSocketState.DISCONNECTED:
            return
        try:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        except RuntimeError:
            logger.debug("Socket already closed while refusing", exc_info=True)

    async def _receive_loop(self, websocket: WebSocket, connection: Connection) -> None:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                return
            except (ValueError, KeyError):
                logger.debug("Ignoring malformed frame from %r", connection)
                continue

            if not isinstance(message, dict):
                continue

            if message.get("type") == ACK_MESSAGE:
                await self._acknowledge(connection, message.get("ids"))

    async def _acknowledge(self, connection: Connection, ids: Any) -> None:
        if not isinstance(ids, list) or not ids:
            return
        try:
            updated = await anyio.to_thread.run_sync(
                self._store.mark_many_read, ids, connection.owner_id
            )
        except SQLAlchemyError:
            logger.warning(
                "Could not mark notifications %s as read for user %s",
                ids,
                connection.owner_id,
                exc_info=True,
            )
            return
        connection.enqueue({"type": ACK_MESSAGE, "data": {"ids": ids, "updated": updated}})


__all__ = [
    "ACK_MESSAGE",
    "AUTH_MESSAGE",
    "CONNECTED_EVENT",
    "SessionManager",
    "extract_token",
]
