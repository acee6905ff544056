"""Millisecond time sources polled by the timer tasks."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report elapsed milliseconds.

    Readings must never decrease. Only the difference between two readings
    is meaningful.
    """

    def now_ms(self) -> float:
        ...


class MonotonicClock:
    """Clock backed by ``time.monotonic``."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0
