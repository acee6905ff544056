"""Cooperative scheduler: task registry, run loop, timers and stream helpers."""

from __future__ import annotations

import inspect
import logging
from typing import Callable, Generator, Sequence

from cooploop.config.settings import FaultPolicy
from cooploop.core import timers
from cooploop.core.clock import Clock, MonotonicClock
from cooploop.core.errors import SchedulerUsageError
from cooploop.core.state_machine import TaskState
from cooploop.core.task import Task
from cooploop.streams import Stream, read_chunks, read_lines, write_chunks
from cooploop.streams.adapters import check_buffer_size

logger = logging.getLogger(__name__)


def _suspend() -> Generator[None, None, None]:
    yield


class Scheduler:
    """
    Owns a registry of tasks and resumes each active one once per pass.

    Features:
    - Lazy reaping of finished tasks (one pass late at most)
    - Timers polled against an injectable millisecond clock
    - Chunked stream reads and writes throttled to one step per pass
    - Configurable handling of routine faults
    """

    def __init__(
        self,
        clock: Clock | None = None,
        fault_policy: FaultPolicy | str = FaultPolicy.FAIL_FAST,
        on_fault: Callable[[Task, BaseException], None] | None = None,
    ):
        self._clock = clock or MonotonicClock()
        self._fault_policy = FaultPolicy(fault_policy)
        self._on_fault = on_fault
        self._tasks: dict[Generator, Task] = {}
        self._current: Task | None = None
        self._passes = 0

    @classmethod
    def from_settings(
        cls,
        settings,
        clock: Clock | None = None,
        on_fault: Callable[[Task, BaseException], None] | None = None,
    ) -> Scheduler:
        """Build a scheduler using the configured fault policy."""
        return cls(clock=clock, fault_policy=settings.scheduler.fault_policy, on_fault=on_fault)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task: object) -> bool:
        return isinstance(task, Task) and self._tasks.get(task.routine) is task

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def fault_policy(self) -> FaultPolicy:
        return self._fault_policy

    @property
    def pass_count(self) -> int:
        """Number of completed or in-progress passes."""
        return self._passes

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the registered tasks."""
        return list(self._tasks.values())

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def create_task(self, func: Callable[..., Generator], *args, name: str | None = None) -> Task:
        """
        Register ``func(*args)`` as a new, inactive task.

        Args:
            func: Generator function; each ``yield`` is a suspension point
            *args: Arguments for ``func``
            name: Label used in logs (defaults to the function name)

        Returns:
            The created Task; call ``start()`` to let the scheduler run it
        """
        routine = func(*args)
        if not inspect.isgenerator(routine):
            raise TypeError(f"{func!r} did not return a generator (got {type(routine).__name__})")

        task = Task(self, routine, name=name or getattr(func, "__name__", "task"))
        self._tasks[routine] = task
        logger.debug(f"Created task {task.name}#{task.id}")
        return task

    def _spawn(self, func: Callable[..., Generator], *args, name: str) -> Task:
        task = self.create_task(func, *args, name=name)
        task.start()
        return task

    def discard(self, task: Task) -> None:
        """Remove ``task`` from the registry if it is registered."""
        if self._tasks.get(task.routine) is task:
            del self._tasks[task.routine]

    def clear(self) -> None:
        """Drop every task."""
        if self._tasks:
            logger.debug(f"Clearing {len(self._tasks)} task(s)")
        self._tasks.clear()

    def get_thread(self, handle: Generator | Task | None = None) -> Task | None:
        """
        Look up a task.

        With no handle, returns the task currently being resumed, or None when
        called outside any task.
        """
        if handle is None:
            return self._current
        if isinstance(handle, Task):
            return handle if handle in self else None
        return self._tasks.get(handle)

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def run_once(self) -> bool:
        """
        Run one pass over the registry.

        Returns:
            True if any registered task has not finished yet
        """
        self._passes += 1

        # Snapshot: tasks created during this pass wait for the next one.
        for routine, task in list(self._tasks.items()):
            if self._tasks.get(routine) is not task:
                continue  # cleared earlier in this pass

            state = task.state
            if state is TaskState.DEAD:
                del self._tasks[routine]
                logger.debug(f"Reaped task {task.name}#{task.id}")
            elif state is TaskState.SUSPENDED and task.is_active():
                self._resume(task)

        return any(not task.state.is_terminal() for task in self._tasks.values())

    def _resume(self, task: Task) -> None:
        previous, self._current = self._current, task
        try:
            task.resume()
        except Exception as exc:
            if self._fault_policy is FaultPolicy.FAIL_FAST:
                logger.debug(
                    f"Task {task.name}#{task.id} raised {exc!r}; aborting pass",
                    extra={"task_name": task.name},
                )
                raise
            logger.exception(
                f"Task {task.name}#{task.id} failed; continuing",
                extra={"task_name": task.name},
            )
            if self._on_fault:
                self._on_fault(task, exc)
        finally:
            self._current = previous

    def run_until_complete(self) -> None:
        """Run passes until no unfinished task remains."""
        run = self.run_once
        while run():
            pass

    def run_forever(self) -> None:
        """Run passes regardless of task activity."""
        run = self.run_once
        while True:
            run()

    # ------------------------------------------------------------------
    # Sleeping
    # ------------------------------------------------------------------

    def sleep(self, delay_ms: float) -> Generator[None, None, None]:
        """
        Suspend the calling task for ``delay_ms``.

        Use as ``yield from scheduler.sleep(delay_ms)`` inside a routine. The
        task is stopped right away and restarted by a timeout task; the
        returned generator performs the suspension.

        Raises:
            SchedulerUsageError: if no task is being resumed
        """
        task = self.get_thread()
        if task is None:
            raise SchedulerUsageError("cannot async sleep outside of a loop task")
        task.sleep(delay_ms)
        return _suspend()

    def sleep_sync(self, delay_ms: float) -> None:
        """Busy-wait ``delay_ms`` on this thread, starving every task meanwhile."""
        start = self._clock.now_ms()
        while delay_ms > self._clock.now_ms() - start:
            pass

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def set_immediate(self, callback: Callable[[], object]) -> Task:
        """Call ``callback`` once on the next pass."""
        return self._spawn(timers.immediate, callback, name="immediate")

    def set_tick(self, callback: Callable[[], object]) -> Task:
        """Call ``callback`` on every pass until the task is stopped or cleared."""
        return self._spawn(timers.tick, callback, name="tick")

    def set_interval(self, delay_ms: float, callback: Callable[[], object]) -> Task:
        """Call ``callback`` every ``delay_ms`` milliseconds."""
        timers.check_delay(delay_ms)
        return self._spawn(
            timers.interval, self._clock, delay_ms, callback, self._clock.now_ms(), name="interval"
        )

    def set_timeout(self, delay_ms: float, callback: Callable[[], object]) -> Task:
        """Call ``callback`` once after ``delay_ms`` milliseconds."""
        timers.check_delay(delay_ms)
        return self._spawn(
            timers.timeout, self._clock, delay_ms, callback, self._clock.now_ms(), name="timeout"
        )

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def read(self, stream: Stream, buffer_size: int, callback: Callable) -> Task:
        """Feed ``callback`` one chunk of at most ``buffer_size`` per pass until end of stream."""
        check_buffer_size(buffer_size)
        return self._spawn(read_chunks, stream, buffer_size, callback, name="read")

    def write(self, stream: Stream, buffer_size: int | None, data: Sequence) -> Task | None:
        """
        Write ``data`` to ``stream`` in ``buffer_size`` slices, one per pass.

        Data shorter than ``buffer_size``, or any data when ``buffer_size`` is
        None, is written immediately.

        Returns:
            The writer Task, or None if the write already completed
        """
        if buffer_size is not None:
            check_buffer_size(buffer_size)
        if buffer_size is None or len(data) < buffer_size:
            stream.write(data)
            return None
        return self._spawn(write_chunks, stream, buffer_size, data, name="write")

    def lines(self, stream: Stream, callback: Callable) -> Task:
        """Feed ``callback`` one line per pass."""
        return self._spawn(read_lines, stream, callback, name="lines")
