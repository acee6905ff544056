"""Stream adapters driven by the scheduler."""

from .adapters import read_chunks, read_lines, write_chunks
from .base import FileStream, Stream

__all__ = [
    "Stream",
    "FileStream",
    "read_chunks",
    "write_chunks",
    "read_lines",
]
