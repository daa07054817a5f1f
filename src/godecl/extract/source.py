"""Random-access reads of byte spans from the original source.

Two strategies share one interface:

- ``BufferSource`` holds the whole file in memory.
- ``FileSource`` keeps an open binary handle for the lifetime of the parse and
  seeks for every read, so very large files are never fully loaded.

``open_source`` picks one by file size and guarantees the handle is closed on
every exit path.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Protocol

from godecl.core.errors import SourceUnreadableError, SpanReadError
from godecl.core.logging import get_logger

log = get_logger("source")

_MB = 1024 * 1024

# Chunk size handed to the grammar parser when it reads through a file handle
PARSE_CHUNK_SIZE = 64 * 1024


class SpanSource(Protocol):
    """Byte-addressable view of one source file."""

    path: str
    size: int

    def read_bytes(self, start: int, end: int) -> bytes: ...

    def read_span(self, start: int, end: int) -> str: ...

    def read_chunk(self, offset: int, length: int) -> bytes: ...


def _check_range(start: int, end: int, size: int) -> None:
    if start < 0 or end < start or end > size:
        raise SpanReadError.out_of_range(start, end, size)


def _decode(data: bytes, start: int, end: int) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SpanReadError.undecodable(start, end, str(e)) from e


class BufferSource:
    """Whole source held in memory."""

    def __init__(self, data: bytes, path: str = "<memory>") -> None:
        self.path = path
        self._data = data
        self.size = len(data)

    @property
    def data(self) -> bytes:
        return self._data

    def read_bytes(self, start: int, end: int) -> bytes:
        _check_range(start, end, self.size)
        return self._data[start:end]

    def read_span(self, start: int, end: int) -> str:
        """Text of ``[start, end)`` exactly as it appears in the source."""
        return _decode(self.read_bytes(start, end), start, end)

    def read_chunk(self, offset: int, length: int) -> bytes:
        return self._data[offset : offset + length]


class FileSource:
    """Source read on demand through an open binary handle."""

    def __init__(self, handle: BinaryIO, size: int, path: str) -> None:
        self.path = path
        self.size = size
        self._handle = handle

    def read_bytes(self, start: int, end: int) -> bytes:
        _check_range(start, end, self.size)
        self._handle.seek(start)
        data = self._handle.read(end - start)
        if len(data) != end - start:
            raise SpanReadError.short_read(start, end, len(data))
        return data

    def read_span(self, start: int, end: int) -> str:
        """Text of ``[start, end)`` exactly as it appears in the source."""
        return _decode(self.read_bytes(start, end), start, end)

    def read_chunk(self, offset: int, length: int) -> bytes:
        if offset >= self.size:
            return b""
        self._handle.seek(offset)
        return self._handle.read(length)


@contextmanager
def open_source(
    path: Path,
    *,
    max_file_size_mb: int = 64,
    in_memory_limit_mb: int = 16,
) -> Iterator[SpanSource]:
    """Acquire the source for one parse.

    Raises:
        SourceUnreadableError: The file is missing, unreadable, or over the size limit.
    """
    try:
        size = path.stat().st_size
    except OSError as e:
        raise SourceUnreadableError.unreadable(str(path), e.strerror or str(e)) from e

    if size > max_file_size_mb * _MB:
        raise SourceUnreadableError.too_large(str(path), size, max_file_size_mb * _MB)

    if size <= in_memory_limit_mb * _MB:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise SourceUnreadableError.unreadable(str(path), e.strerror or str(e)) from e
        log.debug("source_loaded", path=str(path), size=size, strategy="buffer")
        yield BufferSource(data, str(path))
        return

    try:
        handle = path.open("rb")
    except OSError as e:
        raise SourceUnreadableError.unreadable(str(path), e.strerror or str(e)) from e
    log.debug("source_opened", path=str(path), size=size, strategy="file")
    try:
        yield FileSource(handle, size, str(path))
    finally:
        handle.close()
