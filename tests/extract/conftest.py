"""Shared fixtures for extraction tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from godecl.config.models import ExtractConfig
from godecl.extract import ExtractionResult, extract_source

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def parse_me() -> Path:
    return FIXTURES / "parse_me.go"


@pytest.fixture
def extract() -> Callable[..., ExtractionResult]:
    """Extract Go source given as text, with optional ExtractConfig overrides."""

    def _extract(code: str, **overrides: Any) -> ExtractionResult:
        return extract_source(code.encode(), path="test.go", config=ExtractConfig(**overrides))

    return _extract
