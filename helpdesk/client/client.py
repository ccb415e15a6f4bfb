"""Websocket client that reconnects with backoff and reconciles on connect."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable
from urllib.parse import urlencode

import anyio
import httpx
from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, InvalidStatus, WebSocketException

from .inbox import NotificationInbox
from .policy import ReconnectPolicy

logger = logging.getLogger(__name__)

_POLICY_VIOLATION = 1008
_AUTH_STATUS_CODES = {401, 403}


class AuthenticationRequired(RuntimeError):
    """The server refused the credential; the user must log in again."""


class ReconnectExhausted(RuntimeError):
    """Every reconnection attempt allowed by the policy failed."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Gave up after {attempts} reconnection attempt(s)")
        self.attempts = attempts


EventHandler = Callable[[str, Any], None]


class NotificationClient:
    """Keep a :class:`NotificationInbox` in sync with the server.

    Every successful (re)connect is followed by an authoritative REST fetch;
    pushes received afterwards are merged into the inbox. Transport failures
    are retried following ``policy``; a refused credential is not.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        policy: ReconnectPolicy | None = None,
        inbox: NotificationInbox | None = None,
        limit: int = 20,
        http_client: httpx.AsyncClient | None = None,
        on_event: EventHandler | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.policy = policy or ReconnectPolicy()
        self.inbox = inbox or NotificationInbox()
        self.limit = limit
        self.connected = False
        self._token = token
        self._http = http_client or httpx.AsyncClient(base_url=self.base_url)
        self._on_event = on_event

    @property
    def websocket_url(self) -> str:
        scheme, _, rest = self.base_url.partition("://")
        ws_scheme = "wss" if scheme == "https" else "ws"
        return f"{ws_scheme}://{rest}/notifications/ws?{urlencode({'token': self._token})}"

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    async def fetch_notifications(self) -> list[dict[str, Any]]:
        response = await self._http.get(
            "/notifications/", params={"limit": self.limit}, headers=self._headers
        )
        self._raise_for_status(response)
        return response.json()

    async def reconcile(self) -> None:
        """Replace the local view with the server's list."""

        self.inbox.reconcile(await self.fetch_notifications())

    async def mark_read(self, notification_id: int) -> None:
        response = await self._http.patch(
            f"/notifications/{notification_id}/read", headers=self._headers
        )
        self._raise_for_status(response)
        self.inbox.mark_read(notification_id)

    async def mark_all_read(self) -> None:
        response = await self._http.patch("/notifications/read-all", headers=self._headers)
        self._raise_for_status(response)
        self.inbox.mark_all_read()

    async def run(self) -> None:
        """Stay connected until cancelled, refused, or out of attempts.

        Cancel the surrounding task (or cancel scope) to stop the client.
        """

        attempt = 0
        while True:
            try:
                await self._session()
            except (OSError, TimeoutError, WebSocketException, httpx.HTTPError) as exc:
                logger.info("Realtime connection lost: %s", exc)
            finally:
                # Attempts are counted per outage, from the last reconciled session.
                if self.connected:
                    attempt = 0
                self.connected = False

            attempt += 1
            if attempt > self.policy.max_attempts:
                raise ReconnectExhausted(self.policy.max_attempts)
            delay = self.policy.delay_for(attempt)
            logger.info("Reconnection attempt %d in %.1fs", attempt, delay)
            await anyio.sleep(delay)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _session(self) -> None:
        try:
            async with connect(
                self.websocket_url, open_timeout=self.policy.connect_timeout
            ) as websocket:
                await self.reconcile()
                self.connected = True
                async for raw in websocket:
                    self._handle(raw)
        except InvalidStatus as exc:
            if exc.response.status_code in _AUTH_STATUS_CODES:
                raise AuthenticationRequired("Websocket handshake refused") from exc
            raise
        except ConnectionClosed as exc:
            if exc.rcvd is not None and exc.rcvd.code == _POLICY_VIOLATION:
                raise AuthenticationRequired("Websocket closed by policy") from exc
            raise

    def _handle(self, raw: str | bytes) -> None:
        try:
            message = json.loads(raw)
        except ValueError:
            logger.debug("Ignoring malformed frame %r", raw)
            return
        if not isinstance(message, dict):
            return

        event_type = message.get("type")
        data = message.get("data")
        if event_type == "notification" and isinstance(data, dict):
            self.inbox.apply_push(data)
        if self._on_event is not None and isinstance(event_type, str):
            self._on_event(event_type, data)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.status_code in _AUTH_STATUS_CODES:
            raise AuthenticationRequired(f"HTTP {response.status_code}")
        response.raise_for_status()


__all__ = ["AuthenticationRequired", "NotificationClient", "ReconnectExhausted"]
