"""Main entry point for cooploop."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.markup import escape

from cooploop.config import Settings, clear_settings_cache, get_settings
from cooploop.core import Scheduler
from cooploop.streams import FileStream
from cooploop.utils.logger import console, print_banner, setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="cooploop - drive file I/O through a cooperative task scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to config file (default: config/cooploop.yaml)",
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--copy",
        nargs=2,
        metavar=("SRC", "DST"),
        help="Copy SRC to DST one chunk per scheduler pass",
    )
    mode.add_argument(
        "--lines",
        type=str,
        metavar="FILE",
        help="Print FILE one line per scheduler pass",
    )

    parser.add_argument(
        "--buffer-size",
        type=int,
        help="Chunk size in bytes for --copy (default: from config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def copy_file(src: Path, dst: Path, settings: Settings, buffer_size: int | None = None) -> int:
    """
    Copy a file through read/write tasks, reporting progress on an interval.

    Returns:
        Number of bytes copied

    Raises:
        OSError: if the source or destination cannot be read or written
    """
    buffer_size = buffer_size or settings.streams.buffer_size
    failures: list[BaseException] = []
    scheduler = Scheduler.from_settings(settings, on_fault=lambda task, exc: failures.append(exc))
    copied = 0

    def on_chunk(chunk: bytes) -> None:
        nonlocal copied
        scheduler.write(target, None, chunk)
        copied += len(chunk)

    def report() -> None:
        logger.info(f"{src.name}: {copied} bytes copied ({scheduler.pass_count} passes)")

    with FileStream(open(src, "rb")) as source, FileStream(open(dst, "wb")) as target:
        reader = scheduler.read(source, buffer_size, on_chunk)
        heartbeat = scheduler.set_interval(settings.streams.heartbeat_ms, report)

        while not reader.done:
            scheduler.run_once()

        heartbeat.clear()

    if failures:
        raise failures[0]

    logger.info(f"Copied {copied} bytes from {src} to {dst}")
    return copied


def print_lines(path: Path, settings: Settings) -> int:
    """Print every line of a file. Returns the number of lines."""
    scheduler = Scheduler.from_settings(settings)
    count = 0

    def on_line(line: str) -> None:
        nonlocal count
        count += 1
        console.print(f"[dim]{count:>6}[/dim] {escape(line)}", highlight=False)

    with FileStream(open(path, "r", encoding="utf-8", errors="replace")) as source:
        scheduler.lines(source, on_line)
        scheduler.run_until_complete()

    return count


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    clear_settings_cache()
    settings = get_settings(args.config)

    log_level = logging.DEBUG if args.debug else logging.INFO
    setup_logging(log_dir=settings.log_dir, level=log_level, log_to_file=settings.log_to_file)

    if args.buffer_size is not None and args.buffer_size <= 0:
        console.print(f"[error]Buffer size must be positive:[/error] {args.buffer_size}")
        return 1

    if args.copy:
        src, dst = (Path(p) for p in args.copy)
        if not src.is_file():
            console.print(f"[error]No such file:[/error] {src}")
            return 1
        print_banner()
        try:
            copy_file(src, dst, settings, args.buffer_size)
        except OSError as e:
            console.print(f"[error]Copy failed:[/error] {escape(str(e))}")
            return 1
        console.print("[success]Copy completed[/success]")
        return 0

    path = Path(args.lines)
    if not path.is_file():
        console.print(f"[error]No such file:[/error] {path}")
        return 1
    try:
        print_lines(path, settings)
    except OSError as e:
        console.print(f"[error]Read failed:[/error] {escape(str(e))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
