"""Fake clock for deterministic task timelines."""

from __future__ import annotations

START_MS = 1_700_000_000_000


class FakeClock:
    """Controllable epoch millisecond clock."""

    def __init__(self, now_ms: int = START_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now_ms += round(seconds * 1000)
