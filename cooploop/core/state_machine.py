"""Task state derived from the underlying generator."""

from __future__ import annotations

import inspect
from enum import Enum, auto
from typing import Generator


class TaskState(Enum):
    """Execution states of a task's routine."""

    SUSPENDED = auto()
    RUNNING = auto()
    DEAD = auto()

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self is TaskState.DEAD

    @classmethod
    def of(cls, routine: Generator) -> TaskState:
        """Read the state of a generator.

        A generator that has not started yet counts as suspended: the first
        resume runs it up to its first ``yield``.
        """
        return _GENERATOR_STATES[inspect.getgeneratorstate(routine)]


_GENERATOR_STATES: dict[str, TaskState] = {
    inspect.GEN_CREATED: TaskState.SUSPENDED,
    inspect.GEN_SUSPENDED: TaskState.SUSPENDED,
    inspect.GEN_RUNNING: TaskState.RUNNING,
    inspect.GEN_CLOSED: TaskState.DEAD,
}
