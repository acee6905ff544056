# tests/test_settings.py

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cooploop.config import FaultPolicy, get_settings
from cooploop.config.settings import load_config_file
from cooploop.core import Scheduler


def test_defaults_without_config_file() -> None:
    settings = get_settings()

    assert settings.scheduler.fault_policy is FaultPolicy.FAIL_FAST
    assert settings.streams.buffer_size == 4096
    assert settings.streams.heartbeat_ms == 1000
    assert settings.log_dir == "logs"
    assert settings.log_to_file is False


def test_yaml_file_with_env_expansion(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHUNK", "128")
    config = tmp_path / "custom.yaml"
    config.write_text(
        "scheduler:\n"
        "  fault_policy: ISOLATE\n"
        "streams:\n"
        "  buffer_size: ${CHUNK}\n"
        "log_dir: /var/log/${CHUNK}\n",
        encoding="utf-8",
    )

    settings = get_settings(str(config))

    assert settings.scheduler.fault_policy is FaultPolicy.ISOLATE
    assert settings.streams.buffer_size == 128
    assert settings.log_dir == "/var/log/128"
    assert Scheduler.from_settings(settings).fault_policy is FaultPolicy.ISOLATE


def test_default_location_is_discovered(tmp_path: Path) -> None:
    # conftest chdirs into tmp_path
    (tmp_path / "cooploop.yaml").write_text("log_to_file: true\n", encoding="utf-8")

    assert load_config_file() == {"log_to_file": True}
    assert get_settings().log_to_file is True


def test_missing_file_yields_empty_config(tmp_path: Path) -> None:
    assert load_config_file(tmp_path / "nope.yaml") == {}


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COOPLOOP_LOG_DIR", "elsewhere")
    monkeypatch.setenv("COOPLOOP_SCHEDULER__FAULT_POLICY", "isolate")

    settings = get_settings()

    assert settings.log_dir == "elsewhere"
    assert settings.scheduler.fault_policy is FaultPolicy.ISOLATE


def test_invalid_buffer_size_is_rejected(tmp_path: Path) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("streams:\n  buffer_size: 0\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        get_settings(str(config))


def test_settings_are_cached(tmp_path: Path) -> None:
    assert get_settings() is get_settings()
