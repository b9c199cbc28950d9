"""Periodic task scheduling on the asyncio event loop.

Each scheduled task runs in its own loop: it fires once immediately, then
every ``interval_sec`` measured from the start of the previous invocation.
Tasks never wait on each other, a failing invocation is logged and does not
stop later ones, and a manual trigger runs the action out of band without
touching the task's timer.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from types import TracebackType
from typing import Self

from plantmon.logging import get_logger

type Action = Callable[[], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class ScheduledTask:
    """An async action to run at a fixed interval."""

    name: str
    interval_sec: float
    action: Action

    def __post_init__(self) -> None:
        if self.interval_sec <= 0:
            raise ValueError(
                f"interval_sec must be positive, got {self.interval_sec}"
            )


class PollingScheduler:
    """Starts scheduled tasks and reports their failures.

    Override ``on_error`` to customize error handling. Default logs the
    error and keeps the task scheduled.
    """

    def __init__(self, name: str = "scheduler") -> None:
        self.name = name
        self._logger = get_logger(f"polling.{name}")

    def on_error(self, task: ScheduledTask, error: Exception) -> None:
        """Handle an exception raised by a task's action."""
        self._logger.warning("%s failed: %s", task.name, error)

    async def _invoke(self, task: ScheduledTask) -> None:
        """Run a task's action once, containing any failure."""
        try:
            await task.action()
        except Exception as e:
            self.on_error(task, e)

    async def _run_loop(self, task: ScheduledTask) -> None:
        """Run the periodic loop for one task until cancelled."""
        loop = asyncio.get_running_loop()
        self._logger.debug(
            "%s scheduled every %ss", task.name, task.interval_sec
        )
        while True:
            cycle_start = loop.time()
            await self._invoke(task)

            # Sleep only the remaining time to maintain consistent intervals
            elapsed = loop.time() - cycle_start
            await asyncio.sleep(max(0, task.interval_sec - elapsed))

    def start(self, tasks: Iterable[ScheduledTask]) -> "SchedulerHandle":
        """Start every task on the running event loop.

        Returns:
            A handle owning the running tasks; cancel it on teardown.

        Raises:
            ValueError: If two tasks share a name.
        """
        tasks = list(tasks)
        names = [task.name for task in tasks]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate scheduled task names: {names}")

        handle = SchedulerHandle(self)
        for task in tasks:
            handle._add(task)
        self._logger.info(
            "%s started: %s", self.name, ", ".join(handle.task_names)
        )
        return handle


class SchedulerHandle:
    """Owns the asyncio tasks started by a PollingScheduler."""

    def __init__(self, scheduler: PollingScheduler) -> None:
        self._scheduler = scheduler
        self._tasks: dict[str, ScheduledTask] = {}
        self._loops: dict[str, asyncio.Task[None]] = {}
        self._triggered: set[asyncio.Task[None]] = set()
        self._cancelled = False

    @property
    def task_names(self) -> list[str]:
        return list(self._tasks)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _add(self, task: ScheduledTask) -> None:
        self._tasks[task.name] = task
        self._loops[task.name] = asyncio.create_task(
            self._scheduler._run_loop(task), name=f"poll:{task.name}"
        )

    def trigger(self, name: str) -> asyncio.Task[None]:
        """Run a task's action now, independently of its periodic timer.

        Raises:
            KeyError: If no task has this name.
            RuntimeError: If the handle has been cancelled.
        """
        if self._cancelled:
            raise RuntimeError("Scheduler handle has been cancelled")
        task = self._tasks[name]
        self._scheduler._logger.info("Manual refresh of %s", name)
        running = asyncio.create_task(
            self._scheduler._invoke(task), name=f"trigger:{name}"
        )
        self._triggered.add(running)
        running.add_done_callback(self._triggered.discard)
        return running

    def cancel(self) -> None:
        """Stop every periodic loop and any in-flight manual invocation."""
        if self._cancelled:
            return
        self._cancelled = True
        for running in [*self._loops.values(), *self._triggered]:
            running.cancel()
        self._scheduler._logger.info("%s cancelled", self._scheduler.name)

    async def wait_closed(self) -> None:
        """Wait until every cancelled task has finished unwinding."""
        pending = [*self._loops.values(), *self._triggered]
        await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        self.cancel()
        await self.wait_closed()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
