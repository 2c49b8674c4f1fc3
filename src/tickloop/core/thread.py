# src/tickloop/core/thread.py

from __future__ import annotations

"""
Periodic task runner.

A Thread owns an ordered list of task entries and repeatedly runs them:
- start() runs one pass right away and arms the next one,
- every pass walks a snapshot of the entries in insertion order,
- a failing task is recorded once and never stops the pass,
- the next pass is armed only after the current one returns, and only while RUNNING.

The timer (how "call me again in N ms" happens) is an injected port; by default
it is the running asyncio loop.
"""

import asyncio
import inspect
import logging
import threading
from collections.abc import Awaitable

from ..config import get_settings
from ..timers import AsyncioTimer
from .models import TaskEntry, TaskError, ThreadState
from .ports import Callback, Task, Timer

logger = logging.getLogger(__name__)


def build_failure_message(count: int, *, thread_name: str | None = None, task_name: str | None = None) -> str:
    """
    Diagnostic line printed the first time a task fails.

    Shape: "<Thread '<name>': >An error occurred< in the task: '<task>'> (<count>)"
    """
    prefix = f"Thread '{thread_name}': " if thread_name else ""
    where = f" in the task: '{task_name}'" if task_name else ""
    return f"{prefix}An error occurred{where} ({count})"


def _same_task(a: Task, b: Task) -> bool:
    if a is b:
        return True
    # Bound methods are re-created on every attribute access.
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return False


def _task_label(entry: TaskEntry) -> str:
    if entry.name:
        return entry.name
    return getattr(entry.task, "__qualname__", None) or repr(entry.task)


def _check_period(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"period must be an int (milliseconds), got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"period must be positive, got {value}")
    return value


class Thread:
    """
    Fluent periodic runner.

    Every configuration method returns the Thread itself:

        Thread(100).add(poll).count(2).on_finish(done).name("poll").start()

    count/on_finish/name act on the most recently added entry.
    """

    def __init__(self, period: int | None = None, *, timer: Timer | None = None) -> None:
        if period is None:
            period = get_settings().default_period_ms
        self._period = _check_period(period)
        self._timer: Timer = timer if timer is not None else AsyncioTimer()
        self._state = ThreadState.IDLE
        self._name: str | None = None
        self._entries: list[TaskEntry] = []
        self._last: TaskEntry | None = None
        self._errors: list[TaskError] = []
        self._background: set[asyncio.Future] = set()
        # Passes may be armed from timer threads; only one runs at a time.
        self._pass_lock = threading.RLock()

    # ---- read-only views ----

    @property
    def period(self) -> int:
        return self._period

    @property
    def state(self) -> ThreadState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is ThreadState.RUNNING

    @property
    def thread_name(self) -> str | None:
        return self._name

    @property
    def entries(self) -> tuple[TaskEntry, ...]:
        return tuple(self._entries)

    @property
    def errors(self) -> tuple[TaskError, ...]:
        return tuple(self._errors)

    def __repr__(self) -> str:
        return (
            f"<Thread name={self._name!r} state={self._state.value} "
            f"period={self._period}ms entries={len(self._entries)}>"
        )

    # ---- configuration ----

    def set_period(self, value: int) -> Thread:
        """New period applies from the next armed pass; an armed one keeps its delay."""
        self._period = _check_period(value)
        return self

    def name(self, label: str) -> Thread:
        """
        Name the last added entry, or the Thread itself.

        The Thread is named when there are no entries or when the last entry is
        already named; otherwise the last entry gets the label.
        """
        if self._last is None or self._last.name is not None:
            self._name = label
        else:
            self._last.name = label
        return self

    # ---- registration ----

    def add(self, task: Task) -> Thread:
        entry = TaskEntry(task=task)
        self._entries.append(entry)
        self._last = entry
        logger.debug("%r: added task %s", self, _task_label(entry))
        return self

    def count(self, times: int) -> Thread:
        if self._last is not None:
            self._last.max_runs = times
        return self

    def on_finish(self, callback: Callback) -> Thread:
        if self._last is not None:
            self._last.on_finish = callback
        return self

    def remove(self, task: Task) -> Thread:
        before = len(self._entries)
        self._entries = [e for e in self._entries if not _same_task(e.task, task)]
        if self._last is not None and self._last not in self._entries:
            self._last = self._entries[-1] if self._entries else None
        logger.debug("%r: removed %d entr(ies)", self, before - len(self._entries))
        return self

    # ---- lifecycle ----

    def start(self) -> Thread:
        self._state = ThreadState.RUNNING
        logger.info("%r started", self)
        self.run()
        return self

    def stop(self) -> Thread:
        """Pause the loop. A pass that is already armed still runs once, then the chain ends."""
        self._state = ThreadState.PAUSED
        logger.info("%r stopped", self)
        return self

    def run(self) -> None:
        """
        One pass over the entries.

        Mutations made by tasks during the pass (add/remove) are seen by the next pass only.
        Exceptions raised by on_finish callbacks are not caught.
        A pass arriving from another thread waits until the current one returns.
        """
        with self._pass_lock:
            for entry in list(self._entries):
                if entry.finished:
                    continue

                entry.run_count += 1
                try:
                    result = entry.task()
                except Exception as e:
                    self._record_failure(entry, e)
                    continue

                if inspect.isawaitable(result):
                    self._spawn(entry, result)

                if entry.finished:
                    logger.debug("%r: task %s finished after %d run(s)", self, _task_label(entry), entry.run_count)
                    entry.on_finish()

            if self._state is ThreadState.RUNNING:
                self._timer.call_later(self._period / 1000, self.run)

    # ---- internals ----

    def _record_failure(self, entry: TaskEntry, error: Exception) -> None:
        if any(_same_task(rec.task, entry.task) for rec in self._errors):
            return

        self._errors.append(TaskError(task=entry.task, error=error))
        message = build_failure_message(len(self._errors), thread_name=self._name, task_name=entry.name)
        print(message)
        logger.warning("%s [%s]", message, _task_label(entry), exc_info=error)

    def _spawn(self, entry: TaskEntry, awaitable: Awaitable[object]) -> None:
        """Fire-and-forget: the pass never waits for what a task started."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Task %s returned an awaitable outside an event loop; discarded", _task_label(entry))
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        fut = asyncio.ensure_future(awaitable, loop=loop)
        self._background.add(fut)
        fut.add_done_callback(self._on_background_done)

    def _on_background_done(self, fut: asyncio.Future) -> None:
        self._background.discard(fut)
        if fut.cancelled():
            return
        exc = fut.exception()
        if exc is not None:
            logger.warning("Background work started by a task failed: %r", exc, exc_info=exc)
