"""cooploop - a single-threaded cooperative task scheduler."""

from .config import FaultPolicy, Settings, get_settings
from .core import Clock, MonotonicClock, Scheduler, SchedulerUsageError, Task, TaskState
from .streams import FileStream, Stream

__all__ = [
    "Clock",
    "FaultPolicy",
    "FileStream",
    "MonotonicClock",
    "Scheduler",
    "SchedulerUsageError",
    "Settings",
    "Stream",
    "Task",
    "TaskState",
    "get_settings",
]
