"""tickloop: run a set of callables periodically on one cooperative loop."""

import logging

from .config import Settings, get_settings
from .core.models import TaskEntry, TaskError, ThreadState
from .core.ports import Timer
from .core.thread import Thread, build_failure_message
from .logging_setup import setup_logging, setup_logging_from_settings
from .timers import AsyncioTimer, ThreadingTimer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncioTimer",
    "Settings",
    "TaskEntry",
    "TaskError",
    "Thread",
    "ThreadState",
    "ThreadingTimer",
    "Timer",
    "build_failure_message",
    "get_settings",
    "setup_logging",
    "setup_logging_from_settings",
]
