"""Bounded reconnection schedule."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class ReconnectPolicy:
    """Geometric backoff capped at ``max_delay`` for ``max_attempts`` tries.

    Defaults follow the browser client: 1s first delay, 5s ceiling, five
    attempts and a 10s connection timeout.
    """

    initial_delay: float = 1.0
    max_delay: float = 5.0
    max_attempts: int = 5
    multiplier: float = 2.0
    connect_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.initial_delay <= 0 or self.max_delay < self.initial_delay:
            raise ValueError("Delays must be positive and max_delay >= initial_delay")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before reconnect ``attempt`` (1-based)."""

        if attempt < 1:
            raise ValueError("attempt is 1-based")
        return min(self.initial_delay * self.multiplier ** (attempt - 1), self.max_delay)

    def delays(self) -> Iterator[float]:
        for attempt in range(1, self.max_attempts + 1):
            yield self.delay_for(attempt)


__all__ = ["ReconnectPolicy"]
