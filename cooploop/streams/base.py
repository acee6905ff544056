"""Stream interface consumed by the read/write/lines adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import IO, AnyStr, Generic, Iterator


class Stream(ABC, Generic[AnyStr]):
    """Abstract base class for streams driven by the scheduler."""

    @abstractmethod
    def read(self, size: int) -> AnyStr | None:
        """
        Read up to ``size`` units.

        Returns a falsy value (``None`` or an empty chunk) at end of stream.
        """
        pass

    @abstractmethod
    def write(self, data: AnyStr) -> None:
        """Write ``data`` in full."""
        pass

    @abstractmethod
    def lines(self) -> Iterator[AnyStr]:
        """Lazily produce lines without their trailing newline."""
        pass


class FileStream(Stream[AnyStr]):
    """Stream over a Python file object, text or binary."""

    def __init__(self, file: IO[AnyStr]):
        self._file = file

    @property
    def file(self) -> IO[AnyStr]:
        return self._file

    def read(self, size: int) -> AnyStr | None:
        return self._file.read(size)

    def write(self, data: AnyStr) -> None:
        self._file.write(data)

    def lines(self) -> Iterator[AnyStr]:
        for line in self._file:
            newline = b"\n" if isinstance(line, bytes) else "\n"
            yield line[:-1] if line.endswith(newline) else line

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> FileStream[AnyStr]:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
