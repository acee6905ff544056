"""Scheduler exceptions."""

from __future__ import annotations


class SchedulerUsageError(RuntimeError):
    """Raised when a scheduler operation is called from the wrong context,
    e.g. async sleep with no task being resumed."""
