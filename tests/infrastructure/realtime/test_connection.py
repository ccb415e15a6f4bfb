"""Tests for the per-connection outbox and sender task."""

import anyio
import pytest
from fastapi import WebSocketDisconnect

from helpdesk.infrastructure.realtime import Connection


class RecordingSocket:
    def __init__(self, fail_after: int | None = None) -> None:
        self.sent: list[dict] = []
        self._fail_after = fail_after

    async def send_json(self, message: dict) -> None:
        if self._fail_after is not None and len(self.sent) >= self._fail_after:
            raise WebSocketDisconnect(code=1006)
        self.sent.append(message)


@pytest.mark.anyio
async def test_pump_sends_messages_in_order() -> None:
    socket = RecordingSocket()
    connection = Connection(socket, owner_id=1, role="USER")

    for index in range(3):
        assert connection.enqueue({"type": "notification", "data": {"id": index}})
    connection.close()
    await connection.pump()

    assert [message["data"]["id"] for message in socket.sent] == [0, 1, 2]


@pytest.mark.anyio
async def test_full_outbox_drops_new_pushes() -> None:
    connection = Connection(RecordingSocket(), owner_id=1, role="USER", outbox_size=1)

    assert connection.enqueue({"type": "notification"})
    assert not connection.enqueue({"type": "notification"})


def test_closed_connection_rejects_pushes() -> None:
    connection = Connection(RecordingSocket(), owner_id=1, role="USER")
    connection.close()
    connection.close()

    assert connection.closed
    assert not connection.enqueue({"type": "notification"})


@pytest.mark.anyio
async def test_pump_stops_when_the_socket_fails() -> None:
    socket = RecordingSocket(fail_after=1)
    connection = Connection(socket, owner_id=1, role="USER")
    connection.enqueue({"type": "first"})
    connection.enqueue({"type": "second"})

    with anyio.fail_after(1):
        await connection.pump()

    assert [message["type"] for message in socket.sent] == ["first"]
    assert connection.closed
    assert not connection.enqueue({"type": "third"})
