"""Core module - scheduler, tasks and timers."""

from .clock import Clock, MonotonicClock
from .errors import SchedulerUsageError
from .scheduler import Scheduler
from .state_machine import TaskState
from .task import Task

__all__ = [
    "Clock",
    "MonotonicClock",
    "Scheduler",
    "SchedulerUsageError",
    "Task",
    "TaskState",
]
