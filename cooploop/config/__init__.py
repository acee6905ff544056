"""Configuration module."""

from .settings import FaultPolicy, Settings, clear_settings_cache, get_settings

__all__ = ["FaultPolicy", "Settings", "get_settings", "clear_settings_cache"]
