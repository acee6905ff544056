# tests/conftest.py

from __future__ import annotations

import pytest

from cooploop.config import clear_settings_cache
from cooploop.core import Scheduler

from .fakes import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    """Manually advanced clock; time only moves when a test says so."""
    return FakeClock()


@pytest.fixture()
def scheduler(clock: FakeClock) -> Scheduler:
    return Scheduler(clock=clock)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep settings tests independent of the caller's environment and cwd."""
    for name in (
        "COOPLOOP_LOG_DIR",
        "COOPLOOP_LOG_TO_FILE",
        "COOPLOOP_SCHEDULER__FAULT_POLICY",
        "COOPLOOP_STREAMS__BUFFER_SIZE",
        "COOPLOOP_STREAMS__HEARTBEAT_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    clear_settings_cache()
    yield
    clear_settings_cache()
