"""Tests for summary formatting helpers."""

import pytest

from godecl.core.formatting import compress_path, format_counts, pluralize


class TestPluralize:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 types"), (1, "1 type"), (2, "2 types")],
    )
    def test_regular(self, count: int, expected: str) -> None:
        assert pluralize(count, "type") == expected

    def test_irregular(self) -> None:
        assert pluralize(2, "diagnosis", "diagnoses") == "2 diagnoses"


class TestCompressPath:
    def test_short_unchanged(self) -> None:
        assert compress_path("pkg/a.go") == "pkg/a.go"

    def test_middle_elided(self) -> None:
        assert compress_path("pkg/internal/server/handler.go", 25) == "pkg/.../handler.go"

    def test_falls_back_to_filename(self) -> None:
        assert compress_path("averyveryverylongroot/x/handler.go", 15) == "handler.go"


class TestFormatCounts:
    def test_skips_zero(self) -> None:
        assert format_counts({"type": 2, "method": 1, "func": 0}) == "2 types, 1 method"

    def test_all_zero(self) -> None:
        assert format_counts({"type": 0}) == "nothing"
