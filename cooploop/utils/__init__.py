"""Utility helpers."""

from .logger import console, print_banner, setup_logging

__all__ = ["console", "print_banner", "setup_logging"]
