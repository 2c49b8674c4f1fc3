# src/tickloop/timers.py

"""
Concrete Timer implementations.

- AsyncioTimer: loop.call_later on the host's asyncio loop (default).
- ThreadingTimer: threading.Timer, for hosts without an event loop.

Both are single-shot; the Thread arms a new one after every pass.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class AsyncioTimer:
    """
    Schedule callbacks on an asyncio event loop.

    If no loop is given, the running loop is looked up at each call, so a Thread
    can be built outside a coroutine as long as start() happens inside one.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError(
                    "AsyncioTimer needs a running event loop; "
                    "start the Thread from a coroutine or pass loop= explicitly"
                ) from e
        return loop.call_later(max(0.0, float(delay_seconds)), callback)


class ThreadingTimer:
    """Schedule callbacks on short-lived daemon timer threads."""

    def __init__(self, *, daemon: bool = True) -> None:
        self._daemon = daemon

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> threading.Timer:
        def _fire() -> None:
            try:
                callback()
            except Exception:
                # Nothing above us on a timer thread; the chain stops here.
                logger.exception("Scheduled pass crashed on timer thread.")

        timer = threading.Timer(max(0.0, float(delay_seconds)), _fire)
        timer.daemon = self._daemon
        timer.start()
        return timer
