"""Tests for logging configuration."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from trace_query.telemetry import (
    _StructuredJsonFormatter,
    configure_logging,
    get_meter,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestStructuredJsonFormatter:
    def test_format_basic_record(self) -> None:
        formatter = _StructuredJsonFormatter()
        record = logging.LogRecord(
            name="trace_query.request",
            level=logging.INFO,
            pathname="request.py",
            lineno=1,
            msg="Built query request: %s",
            args=("svc",),
            exc_info=None,
        )

        log_obj = json.loads(formatter.format(record))

        assert log_obj["severity"] == "INFO"
        assert log_obj["logger"] == "trace_query.request"
        assert log_obj["message"] == "Built query request: svc"
        assert "trace_id" not in log_obj


class TestConfigureLogging:
    def test_env_level_overrides_argument(self, restore_root_logger) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_FORMAT": "TEXT"}):
            configure_logging(logging.WARNING)
        assert restore_root_logger.level == logging.DEBUG

    def test_invalid_env_level_is_ignored(self, restore_root_logger) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose", "LOG_FORMAT": "TEXT"}):
            configure_logging(logging.ERROR)
        assert restore_root_logger.level == logging.ERROR

    def test_json_format_installs_structured_handler(
        self, restore_root_logger
    ) -> None:
        with patch.dict(os.environ, {"LOG_FORMAT": "json", "LOG_LEVEL": ""}):
            configure_logging(logging.INFO)

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(
            restore_root_logger.handlers[0].formatter, _StructuredJsonFormatter
        )


def test_get_meter_creates_counters() -> None:
    counter = get_meter("tests").create_counter("tests.counter")
    counter.add(1)
