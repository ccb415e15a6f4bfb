"""Ephemeral push payload announced to connected clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RealtimeEvent:
    """A state change pushed to live sessions; never persisted."""

    type: str
    recipient_ids: tuple[int, ...]
    payload: dict[str, Any] = field(default_factory=dict)


__all__ = ["RealtimeEvent"]
