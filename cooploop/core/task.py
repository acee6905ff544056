"""Cooperative task wrapping a generator routine."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Generator

from cooploop.core.state_machine import TaskState

if TYPE_CHECKING:
    from cooploop.core.scheduler import Scheduler

_ids = itertools.count(1)


class Task:
    """
    A unit of work the scheduler resumes once per pass.

    The routine is a generator; every ``yield`` in it is a suspension point.
    The ``active`` flag is separate from the routine's own state: a stopped
    task stays suspended exactly where it was until it is started again.
    """

    def __init__(self, scheduler: Scheduler, routine: Generator, name: str = "task"):
        self._scheduler = scheduler
        self._routine = routine
        self.id = next(_ids)
        self.name = name
        self.active = False

    def __repr__(self) -> str:
        return f"<Task {self.name}#{self.id} {self.state.name.lower()} active={self.active}>"

    @property
    def routine(self) -> Generator:
        """The generator driving this task; also its registry key."""
        return self._routine

    @property
    def state(self) -> TaskState:
        """Current routine state."""
        return TaskState.of(self._routine)

    @property
    def done(self) -> bool:
        """Whether the routine has terminated."""
        return self.state.is_terminal()

    def start(self) -> None:
        """Let the scheduler resume this task."""
        self.active = True

    def stop(self) -> None:
        """Skip this task on every pass until it is started again."""
        self.active = False

    def sleep(self, delay_ms: float) -> Task:
        """
        Deactivate this task and arm a timeout that reactivates it.

        Meant to be called from inside the task's own routine right before it
        yields. Returns the timeout task.
        """
        # Arm first: an invalid delay must leave the task running.
        waker = self._scheduler.set_timeout(delay_ms, self.start)
        self.stop()
        return waker

    def clear(self) -> None:
        """Remove this task from its scheduler, whatever its state."""
        self._scheduler.discard(self)

    def is_active(self) -> bool:
        """Whether the scheduler may resume this task."""
        return self.active is True

    def resume(self) -> None:
        """
        Run the routine up to its next ``yield`` or until it returns.

        Called by the scheduler. Exceptions raised by the routine propagate;
        the generator is closed afterwards either way.
        """
        try:
            next(self._routine)
        except StopIteration:
            pass
