"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest

from godecl.config.models import LoggingConfig, LogOutputConfig
from godecl.core.logging import (
    clear_parse_id,
    configure_logging,
    get_logger,
    get_parse_id,
    set_parse_id,
)


class TestParseIdCorrelation:
    """Parse ID context variable tests."""

    def setup_method(self) -> None:
        clear_parse_id()

    def test_given_parse_id_when_set_then_can_retrieve(self) -> None:
        assert set_parse_id("p-1") == "p-1"
        assert get_parse_id() == "p-1"

    def test_given_no_id_when_set_then_generates_one(self) -> None:
        pid = set_parse_id()
        assert len(pid) == 12
        assert get_parse_id() == pid

    def test_given_id_when_cleared_then_none(self) -> None:
        set_parse_id("p-2")
        clear_parse_id()
        assert get_parse_id() is None


class TestConfigureLogging:
    """Handler setup tests."""

    def teardown_method(self) -> None:
        clear_parse_id()
        configure_logging(level="WARNING")

    def test_given_file_output_when_logging_then_writes_json(self, tmp_path: Path) -> None:
        """JSON file output carries the event and parse id."""
        log_file = tmp_path / "godecl.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_parse_id("abc123")
        get_logger("test").info("extract_done", types=2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "extract_done"
        assert record["types"] == 2
        assert record["parse_id"] == "abc123"
        assert record["logger"] == "test"

    def test_given_level_when_configured_then_root_level_set(self) -> None:
        configure_logging(level="ERROR")
        assert logging.getLogger().level == logging.ERROR

    def test_relative_file_destination_rejected(self) -> None:
        """File destinations must be absolute."""
        with pytest.raises(ValueError):
            LogOutputConfig(destination="relative.log")
