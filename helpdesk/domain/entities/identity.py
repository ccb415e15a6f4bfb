"""Authenticated principal resolved from a bearer credential."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Opaque ``{id, role}`` pair carried by an access token."""

    id: int
    role: str


__all__ = ["Identity"]
