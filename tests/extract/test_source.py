"""Tests for span reads and scoped source acquisition."""

from __future__ import annotations

from pathlib import Path

import pytest

from godecl.core.errors import ErrorCode, SourceUnreadableError, SpanReadError
from godecl.extract.source import BufferSource, FileSource, open_source

_MB = 1024 * 1024


class TestBufferSource:
    """In-memory span reads."""

    def test_reads_exact_range(self) -> None:
        """Span text is the exact byte range, end exclusive."""
        source = BufferSource(b"package demo\n\ntype T int\n")
        assert source.read_span(8, 12) == "demo"
        assert source.read_span(14, 24) == "type T int"

    def test_preserves_whitespace_and_tabs(self) -> None:
        """No normalisation is applied to the extracted text."""
        data = b"func f() {\r\n\tx := 1\r\n}"
        source = BufferSource(data)
        assert source.read_span(0, len(data)) == data.decode()

    def test_empty_span(self) -> None:
        """A zero-length span is the empty string."""
        assert BufferSource(b"abc").read_span(1, 1) == ""

    @pytest.mark.parametrize(
        ("start", "end"),
        [(0, 4), (-1, 2), (2, 1), (4, 5)],
    )
    def test_out_of_range_raises(self, start: int, end: int) -> None:
        """Ranges outside the buffer are reported, never truncated."""
        with pytest.raises(SpanReadError) as excinfo:
            BufferSource(b"abc").read_span(start, end)
        assert excinfo.value.code == ErrorCode.SPAN_READ_ERROR

    def test_undecodable_bytes_raise(self) -> None:
        """Invalid UTF-8 in a span is a span read error."""
        with pytest.raises(SpanReadError, match="UTF-8"):
            BufferSource(b"ok\xff\xfe").read_span(0, 4)

    def test_multibyte_text(self) -> None:
        """Byte offsets address multi-byte characters correctly."""
        data = "// héllo\n".encode()
        source = BufferSource(data)
        assert source.read_span(3, len(data) - 1) == "héllo"


class TestFileSource:
    """Handle-backed span reads."""

    def test_reads_exact_range(self, tmp_path: Path) -> None:
        """Seek-and-read returns the same text as the buffer strategy."""
        path = tmp_path / "a.go"
        path.write_bytes(b"package demo\n")
        with path.open("rb") as handle:
            source = FileSource(handle, 13, str(path))
            assert source.read_span(8, 12) == "demo"

    def test_short_read_raises(self, tmp_path: Path) -> None:
        """Fewer bytes than requested is an error, not a truncated result."""
        path = tmp_path / "a.go"
        path.write_bytes(b"package demo\n")
        with path.open("rb") as handle:
            # Size recorded before the file shrank
            source = FileSource(handle, 100, str(path))
            with pytest.raises(SpanReadError, match="Short read"):
                source.read_span(8, 40)

    def test_out_of_range_raises(self, tmp_path: Path) -> None:
        """Ranges past the recorded size are rejected before reading."""
        path = tmp_path / "a.go"
        path.write_bytes(b"package demo\n")
        with path.open("rb") as handle:
            source = FileSource(handle, 13, str(path))
            with pytest.raises(SpanReadError):
                source.read_span(10, 14)

    def test_read_chunk_past_end_is_empty(self, tmp_path: Path) -> None:
        """Chunk reads signal end of input with empty bytes."""
        path = tmp_path / "a.go"
        path.write_bytes(b"abc")
        with path.open("rb") as handle:
            source = FileSource(handle, 3, str(path))
            assert source.read_chunk(1, 10) == b"bc"
            assert source.read_chunk(3, 10) == b""


class TestOpenSource:
    """Scoped acquisition and release."""

    def test_small_file_loads_into_memory(self, tmp_path: Path) -> None:
        """Files under the in-memory limit use the buffer strategy."""
        path = tmp_path / "a.go"
        path.write_bytes(b"package a\n")
        with open_source(path) as source:
            assert isinstance(source, BufferSource)
            assert source.size == 10
            assert source.path == str(path)

    def test_large_file_uses_handle_and_closes_it(self, tmp_path: Path) -> None:
        """Files over the in-memory limit keep a handle that is closed afterwards."""
        path = tmp_path / "big.go"
        path.write_bytes(b"package big\n" + b"// x\n" * (_MB // 4))
        with open_source(path, in_memory_limit_mb=1) as source:
            assert isinstance(source, FileSource)
            handle = source._handle
            assert source.read_span(8, 11) == "big"
        assert handle.closed

    def test_handle_closed_on_error(self, tmp_path: Path) -> None:
        """The handle is released when the body raises."""
        path = tmp_path / "big.go"
        path.write_bytes(b"package big\n" + b"// x\n" * (_MB // 4))
        handle = None
        with pytest.raises(RuntimeError):
            with open_source(path, in_memory_limit_mb=1) as source:
                handle = source._handle  # type: ignore[attr-defined]
                raise RuntimeError("boom")
        assert handle is not None
        assert handle.closed

    def test_missing_file_is_unreadable(self, tmp_path: Path) -> None:
        """A missing file raises SourceUnreadableError."""
        with pytest.raises(SourceUnreadableError) as excinfo:
            with open_source(tmp_path / "missing.go"):
                pass
        assert excinfo.value.code == ErrorCode.SOURCE_UNREADABLE

    def test_oversized_file_is_refused(self, tmp_path: Path) -> None:
        """Files over max_file_size_mb are refused."""
        path = tmp_path / "huge.go"
        path.write_bytes(b"/" * (_MB + 1))
        with pytest.raises(SourceUnreadableError) as excinfo:
            with open_source(path, max_file_size_mb=1):
                pass
        assert excinfo.value.code == ErrorCode.SOURCE_TOO_LARGE
