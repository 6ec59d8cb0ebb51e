"""Tests for logging configuration.

Tests verify:
- configure_logging installs one JSON handler on the root logger
- TraceIDFilter stamps the current trace ID on records
- log_with_context places fields under "context"
"""

import json
import logging

import pytest

from libs.common.logging.config import (
    TraceIDFilter,
    configure_logging,
    log_with_context,
)
from libs.common.logging.context import clear_trace_id, set_trace_id
from libs.common.logging.formatter import JSONFormatter


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="/path/to/file.py",
        lineno=42,
        msg="Test",
        args=(),
        exc_info=None,
    )


class TestTraceIDFilter:
    """Test suite for TraceIDFilter."""

    def teardown_method(self) -> None:
        clear_trace_id()

    def test_filter_adds_trace_id_to_record(self) -> None:
        record = _record()
        set_trace_id("test-123")

        assert TraceIDFilter().filter(record) is True
        assert record.trace_id == "test-123"  # type: ignore[attr-defined]

    def test_filter_adds_none_when_no_trace_id(self) -> None:
        record = _record()
        clear_trace_id()

        assert TraceIDFilter().filter(record) is True
        assert record.trace_id is None  # type: ignore[attr-defined]


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def setup_method(self) -> None:
        root = logging.getLogger()
        self._saved_handlers = list(root.handlers)
        self._saved_level = root.level

    def teardown_method(self) -> None:
        root = logging.getLogger()
        root.handlers[:] = self._saved_handlers
        root.setLevel(self._saved_level)

    def test_installs_single_json_handler(self) -> None:
        logger = configure_logging(service_name="fanout-gateway", log_level="DEBUG")

        assert logger is logging.getLogger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.formatter.service_name == "fanout-gateway"
        assert any(isinstance(f, TraceIDFilter) for f in handler.filters)

    def test_repeated_calls_do_not_duplicate_handlers(self) -> None:
        configure_logging(service_name="fanout-gateway")
        configure_logging(service_name="fanout-gateway")

        assert len(logging.getLogger().handlers) == 1

    def test_rejects_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(service_name="fanout-gateway", log_level="LOUD")

    def test_output_is_json_with_trace_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(service_name="fanout-gateway", log_level="INFO")
        set_trace_id("trace-abc")
        try:
            logging.getLogger("tests.logging").info("hello")
        finally:
            clear_trace_id()

        line = capsys.readouterr().out.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["message"] == "hello"
        assert entry["service"] == "fanout-gateway"
        assert entry["trace_id"] == "trace-abc"


class TestLogWithContext:
    """Test suite for log_with_context."""

    def test_context_fields_attached(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.logging.context")

        with caplog.at_level(logging.WARNING, logger="tests.logging.context"):
            log_with_context(logger, "WARNING", "Deadline fired", operation="get_api1", deadline_ms=900)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.context == {"operation": "get_api1", "deadline_ms": 900}  # type: ignore[attr-defined]
