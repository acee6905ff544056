"""Timer routines.

Each function here is a generator function the scheduler wraps in a task.
Delays are compared with ``>=`` so a late pass fires once, never several
times to catch up.
"""

from __future__ import annotations

from typing import Callable, Generator

from cooploop.core.clock import Clock


def immediate(callback: Callable[[], object]) -> Generator[None, None, None]:
    """Call back once, then finish on the following resume."""
    callback()
    yield


def tick(callback: Callable[[], object]) -> Generator[None, None, None]:
    """Call back on every resume, forever."""
    while True:
        callback()
        yield


def interval(
    clock: Clock,
    delay_ms: float,
    callback: Callable[[], object],
    started_at: float,
) -> Generator[None, None, None]:
    """Fire every ``delay_ms``, re-arming from the actual firing time."""
    reference = started_at
    while True:
        current = clock.now_ms()
        if current - reference >= delay_ms:
            reference = current
            callback()
        yield


def timeout(
    clock: Clock,
    delay_ms: float,
    callback: Callable[[], object],
    started_at: float,
) -> Generator[None, None, None]:
    """Call back once after ``delay_ms``, then finish."""
    while clock.now_ms() - started_at < delay_ms:
        yield
    callback()


def check_delay(delay_ms: float) -> float:
    """Reject negative delays."""
    if delay_ms < 0:
        raise ValueError(f"delay must be >= 0 ms, got {delay_ms}")
    return delay_ms
