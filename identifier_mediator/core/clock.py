"""Clock abstraction for event timestamps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now_iso(self) -> str: ...


class SystemClock:
    """UTC wall clock."""

    def now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()


class FixedClock:
    """Returns the same timestamp on every call; useful in tests."""

    def __init__(self, ts: str = "2026-01-01T00:00:00+00:00") -> None:
        self._ts = ts

    def now_iso(self) -> str:
        return self._ts
