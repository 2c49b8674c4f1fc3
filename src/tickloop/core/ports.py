# src/tickloop/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The Thread depends on a Timer protocol instead of a concrete event loop.
This keeps the host's deferred-execution primitive swappable and makes
passes easy to drive by hand in tests.
"""

from collections.abc import Callable
from typing import Any, Protocol

Task = Callable[[], Any]
# Anything callable with no arguments. A returned awaitable is fire-and-forget.

Callback = Callable[[], Any]


class Timer(Protocol):
    """
    Single-shot delayed execution.

    call_later must not invoke the callback synchronously; the Thread relies on
    the current pass returning before the next one starts.
    """

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Any: ...
