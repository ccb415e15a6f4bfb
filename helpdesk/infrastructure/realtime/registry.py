"""In-memory index of live connections grouped by user."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Hashable
from typing import DefaultDict, Set


class ConnectionRegistry:
    """Map each user id to the set of its live connection handles.

    The registry holds no durable data and starts empty with every process.
    All methods are plain dictionary operations and must be called from the
    event loop thread; code running in worker threads reaches it through
    ``anyio.from_thread``.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[int, Set[Hashable]] = defaultdict(set)
        self._owners: dict[Hashable, int] = {}

    def register(self, owner_id: int, connection: Hashable) -> None:
        """Add ``connection`` under ``owner_id``.

        Registering the same handle again is a no-op; a handle registered
        under another owner is moved so it only ever appears once.
        """

        current_owner = self._owners.get(connection)
        if current_owner == owner_id:
            return
        if current_owner is not None:
            self._discard(current_owner, connection)
        self._connections[owner_id].add(connection)
        self._owners[connection] = owner_id

    def deregister(self, connection: Hashable) -> None:
        """Remove ``connection`` from whichever owner holds it."""

        owner_id = self._owners.pop(connection, None)
        if owner_id is None:
            return
        self._discard(owner_id, connection)

    def sessions_for(self, owner_id: int) -> frozenset:
        """Return a snapshot of the live connections for ``owner_id``."""

        connections = self._connections.get(owner_id)
        if not connections:
            return frozenset()
        return frozenset(connections)

    def owner_of(self, connection: Hashable) -> int | None:
        return self._owners.get(connection)

    def is_online(self, owner_id: int) -> bool:
        return bool(self._connections.get(owner_id))

    def connection_count(self) -> int:
        return len(self._owners)

    def owner_count(self) -> int:
        return len(self._connections)

    def _discard(self, owner_id: int, connection: Hashable) -> None:
        connections = self._connections.get(owner_id)
        if connections is None:
            return
        connections.discard(connection)
        if not connections:
            self._connections.pop(owner_id, None)


__all__ = ["ConnectionRegistry"]
