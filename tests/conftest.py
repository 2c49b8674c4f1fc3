# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tickloop import Thread

from .fakes import FakeTimer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with setup_logging_from_settings.

    A SimpleNamespace keeps tests independent from the process environment.
    """
    return SimpleNamespace(
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture()
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture()
def make_thread(timer: FakeTimer):
    """Build Threads wired to the shared FakeTimer."""

    def _make(period: int = 100) -> Thread:
        return Thread(period, timer=timer)

    return _make
