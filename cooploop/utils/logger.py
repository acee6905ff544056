"""Rich-formatted logging setup."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Force UTF-8 on Windows
if sys.platform == "win32":
    os.system("")  # Enable ANSI escape sequences on Windows
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")  # type: ignore
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")  # type: ignore

# Custom theme for logging
CUSTOM_THEME = Theme(
    {
        "error": "bold red",
        "success": "bold green",
    }
)

# Global console instance
console = Console(theme=CUSTOM_THEME)


class TaskFormatter(logging.Formatter):
    """Prefixes records logged on behalf of a task with its name."""

    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "task_name"):
            record.msg = f"[{record.task_name}] {record.msg}"
            del record.task_name  # don't prefix twice when several handlers format it
        return super().format(record)


def setup_logging(
    log_dir: str | Path = "logs",
    level: int = logging.INFO,
    log_to_file: bool = False,
) -> None:
    """
    Setup logging with Rich console handler and optional file handler.

    Args:
        log_dir: Directory to store log files
        level: Logging level
        log_to_file: Whether to also log to file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(TaskFormatter("%(message)s"))
    root_logger.addHandler(rich_handler)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"cooploop_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            TaskFormatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)


def print_banner() -> None:
    """Print application banner."""
    banner = """
+==============================================================+
|                          cooploop                            |
|        Cooperative tasks, timers and chunked stream I/O      |
+==============================================================+
"""
    console.print(banner, style="bold cyan")
