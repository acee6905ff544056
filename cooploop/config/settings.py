"""Configuration settings loader with YAML and environment variables support."""

from __future__ import annotations

import os
import re
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FaultPolicy(str, Enum):
    """What the scheduler does when a task's routine raises."""

    FAIL_FAST = "fail_fast"  # propagate out of run_once, aborting the pass
    ISOLATE = "isolate"  # log, notify on_fault, keep servicing other tasks


class SchedulerConfig(BaseModel):
    """Scheduler configuration."""

    fault_policy: FaultPolicy = FaultPolicy.FAIL_FAST


class StreamConfig(BaseModel):
    """Stream adapter defaults used by the CLI."""

    buffer_size: int = Field(default=4096, gt=0)
    heartbeat_ms: int = Field(default=1000, gt=0)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="COOPLOOP_",
        env_nested_delimiter="__",
    )

    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    streams: StreamConfig = Field(default_factory=StreamConfig)

    # App settings
    log_dir: str = "logs"
    log_to_file: bool = False


def _resolve_env_vars(value: Any) -> Any:
    """Resolve environment variables in string values like ${VAR_NAME}."""
    if isinstance(value, str):
        pattern = r"\$\{([^}]+)\}"
        matches = re.findall(pattern, value)
        for match in matches:
            env_value = os.getenv(match, "")
            value = value.replace(f"${{{match}}}", env_value)
        return value
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    return value


def load_config_file(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file."""
    if config_path is None:
        # Try default locations
        locations = [
            Path("config/cooploop.yaml"),
            Path("cooploop.yaml"),
            Path.home() / ".cooploop" / "config.yaml",
        ]
        for loc in locations:
            if loc.exists():
                config_path = loc
                break

    if config_path is None or not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    return _resolve_env_vars(config_data)


@lru_cache
def get_settings(config_path: str | None = None) -> Settings:
    """Get application settings (cached)."""
    path = Path(config_path) if config_path else None
    config_data = load_config_file(path)

    # Accept "ISOLATE" / "Fail_Fast" spellings in hand-written YAML
    scheduler = config_data.get("scheduler")
    if isinstance(scheduler, dict) and isinstance(scheduler.get("fault_policy"), str):
        scheduler["fault_policy"] = FaultPolicy(scheduler["fault_policy"].lower())

    if isinstance(scheduler, dict):
        config_data["scheduler"] = SchedulerConfig(**scheduler)
    if isinstance(config_data.get("streams"), dict):
        config_data["streams"] = StreamConfig(**config_data["streams"])

    return Settings(**config_data)


def clear_settings_cache() -> None:
    """Clear the settings cache."""
    get_settings.cache_clear()
