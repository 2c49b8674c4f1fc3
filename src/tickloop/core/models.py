# src/tickloop/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .ports import Callback, Task


def _noop() -> None:
    return None


class ThreadState(StrEnum):
    """
    Run state of a Thread.

    Notes:
    - IDLE is the "never started" state; only start() drives the loop.
    - A pass re-arms itself only while the state is RUNNING.
    """

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(slots=True, eq=False)
class TaskEntry:
    task: Task
    run_count: int = 0
    max_runs: int | None = None
    on_finish: Callback = field(default=_noop)
    name: str | None = None

    @property
    def finished(self) -> bool:
        return self.max_runs is not None and self.run_count >= self.max_runs


@dataclass(slots=True, frozen=True)
class TaskError:
    """First failure captured for a given task reference."""

    task: Task
    error: Exception
