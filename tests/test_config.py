# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from tickloop.config import DEFAULT_PERIOD_MS, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path) -> None:
    # Run from an empty directory so no stray .env is picked up.
    monkeypatch.chdir(tmp_path)
    for suffix in ("DEFAULT_PERIOD_MS", "LOG_LEVEL", "LOG_DIR"):
        monkeypatch.delenv(f"TICKLOOP_{suffix}", raising=False)


def test_defaults_without_environment() -> None:
    s = Settings.from_env()
    assert s.default_period_ms == DEFAULT_PERIOD_MS == 1000
    assert s.log_level == "INFO"
    assert s.log_dir is None


def test_values_read_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TICKLOOP_DEFAULT_PERIOD_MS", "250")
    monkeypatch.setenv("TICKLOOP_LOG_LEVEL", "debug")
    monkeypatch.setenv("TICKLOOP_LOG_DIR", str(tmp_path))

    s = Settings.from_env()
    assert s.default_period_ms == 250
    assert s.log_level == "DEBUG"
    assert s.log_dir == tmp_path


def test_explicit_mapping_bypasses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("TICKLOOP_DEFAULT_PERIOD_MS", "250")

    s = Settings.from_env({"TICKLOOP_DEFAULT_PERIOD_MS": "40"})
    assert s.default_period_ms == 40


def test_dotenv_file_is_read_without_touching_os_environ(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("TICKLOOP_DEFAULT_PERIOD_MS=75\nTICKLOOP_LOG_LEVEL=warning\n", "utf-8")

    s = Settings.from_env()

    assert s.default_period_ms == 75
    assert s.log_level == "WARNING"
    assert "TICKLOOP_DEFAULT_PERIOD_MS" not in os.environ


def test_environment_wins_over_dotenv_file(monkeypatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("TICKLOOP_DEFAULT_PERIOD_MS=75\n", "utf-8")
    monkeypatch.setenv("TICKLOOP_DEFAULT_PERIOD_MS", "300")

    assert Settings.from_env().default_period_ms == 300


@pytest.mark.parametrize("raw", ["abc", "0", "-5", "  "])
def test_bad_period_falls_back_to_default(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("TICKLOOP_DEFAULT_PERIOD_MS", raw)
    assert Settings.from_env().default_period_ms == DEFAULT_PERIOD_MS
