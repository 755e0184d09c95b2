"""Tick-driven cooperative scheduler for periodic and one-shot tasks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

TICK_MS = 1
HIT_LIST_SIZE = 32
MAX_DEFER_TASKS = 16

_HIT_LIST_MASK = HIT_LIST_SIZE - 1
_U32 = 0xFFFFFFFF

TaskFunc = Callable[[], object]


def _period_to_ticks(period_ms: int) -> int:
    return period_ms // TICK_MS if period_ms >= TICK_MS else 1


@dataclass(eq=False)
class _Task:
    func: Optional[TaskFunc]
    period: int
    arrive: int = 0
    bucket: Optional[list] = None


class Scheduler:
    """Runs periodic tasks from a timing wheel and one-shot deferred tasks.

    Time advances through :meth:`tick`, which plays the role of the timer
    interrupt; :meth:`dispatch` then performs one scheduling step. Periods of
    up to 32 ticks live in a 32-slot wheel, longer ones are re-examined every
    32 ticks and moved into the wheel once they are close enough.
    """

    def __init__(self) -> None:
        self._pre_tick = 0
        self._cur_tick = 0
        self._running = False
        self._long: list[_Task] = []
        self._wheel: list[list[_Task]] = [[] for _ in range(HIT_LIST_SIZE)]
        self._deferred: list[_Task] = []

    @property
    def ticks(self) -> int:
        """Number of timer ticks elapsed."""
        return self._cur_tick

    @property
    def running(self) -> bool:
        """True once :meth:`start` has been called."""
        return self._running

    def _slot(self, offset: int) -> int:
        return (self._pre_tick + offset) & _HIT_LIST_MASK

    def _place(self, task: _Task, period: int) -> None:
        if task.bucket is not None:
            task.bucket.remove(task)
        bucket = self._long if period > HIT_LIST_SIZE else self._wheel[self._slot(period)]
        bucket.append(task)
        task.bucket = bucket

    def create_task(
        self,
        task: TaskFunc,
        period_ms: int,
        init: Optional[TaskFunc] = None,
    ) -> None:
        """Run ``init`` once now, then schedule ``task`` every ``period_ms`` milliseconds."""
        if init is not None:
            init()
        if task is None or not callable(task):
            raise ValueError("task must be callable")
        if not period_ms or period_ms < 0:
            raise ValueError("period_ms must be positive")
        entry = _Task(task, _period_to_ticks(period_ms))
        self._place(entry, entry.period)

    def defer(self, task: Optional[TaskFunc], ms: int) -> None:
        """Run ``task`` once, ``ms`` milliseconds from now; needs a started scheduler."""
        if not self._running:
            raise RuntimeError("scheduler is not running")
        if len(self._deferred) >= MAX_DEFER_TASKS:
            raise RuntimeError(f"at most {MAX_DEFER_TASKS} deferred tasks can be pending")
        if task is not None and not callable(task):
            raise ValueError("task must be callable")
        entry = _Task(task, _period_to_ticks(max(ms, 0)))
        self._deferred.append(entry)
        entry.bucket = self._deferred

    def start(self) -> None:
        """Mark the scheduler as running so that dispatching takes effect."""
        self._running = True

    def tick(self) -> None:
        """Advance the timer by one tick."""
        self._cur_tick += 1

    def dispatch(self) -> bool:
        """Perform one scheduling step; return False if there was nothing to do."""
        if not self._running or self._pre_tick == self._cur_tick:
            return False

        self._pre_tick += 1
        idx = self._slot(0)

        if idx == 0:
            for task in list(self._long):
                task.arrive += HIT_LIST_SIZE
                remain = (task.period - task.arrive) & _U32
                if remain == 0:
                    if task.func is not None:
                        task.func()
                    task.arrive = 0
                elif remain < HIT_LIST_SIZE:
                    self._place(task, remain)

        for task in list(self._wheel[idx]):
            if task.func is not None:
                task.func()
            task.arrive = -idx
            self._place(task, task.period)

        for task in list(self._deferred):
            task.arrive += 1
            if task.arrive >= task.period:
                if task.func is not None:
                    task.func()
                self._deferred.remove(task)
                task.bucket = None

        return True

    def run(self, ticks: int) -> None:
        """Start if needed, then advance ``ticks`` ticks, dispatching after each."""
        if ticks < 0:
            raise ValueError("ticks must not be negative")
        self.start()
        for _ in range(ticks):
            self.tick()
            self.dispatch()