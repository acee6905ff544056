"""Stream routines: one chunk or line per scheduler pass."""

from __future__ import annotations

from typing import Callable, Generator, Sequence

from cooploop.streams.base import Stream


def read_chunks(stream: Stream, buffer_size: int, callback: Callable) -> Generator[None, None, None]:
    while True:
        chunk = stream.read(buffer_size)
        if not chunk:
            return
        callback(chunk)
        yield


def write_chunks(stream: Stream, buffer_size: int, data: Sequence) -> Generator[None, None, None]:
    """Write full ``buffer_size`` slices one per pass, then the remainder."""
    offset = 0
    remaining = len(data)
    while remaining >= buffer_size:
        stream.write(data[offset:offset + buffer_size])
        offset += buffer_size
        remaining -= buffer_size
        yield
    if remaining > 0:
        stream.write(data[offset:])


def read_lines(stream: Stream, callback: Callable) -> Generator[None, None, None]:
    for line in stream.lines():
        callback(line)
        yield


def check_buffer_size(buffer_size: int) -> int:
    if buffer_size <= 0:
        raise ValueError(f"buffer size must be positive, got {buffer_size}")
    return buffer_size
