"""Tests for JSONFormatter."""

import json
import logging
import sys

from libs.common.logging.formatter import JSONFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.ERROR,
        pathname="/path/to/file.py",
        lineno=7,
        msg="Failed %s",
        args=("get_api1",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_base_fields(self) -> None:
        formatter = JSONFormatter(service_name="fanout-gateway")

        entry = json.loads(formatter.format(_record(trace_id="t-1")))

        assert entry["level"] == "ERROR"
        assert entry["service"] == "fanout-gateway"
        assert entry["trace_id"] == "t-1"
        assert entry["message"] == "Failed get_api1"
        assert entry["timestamp"].endswith("Z")
        assert entry["source"] == {"file": "/path/to/file.py", "line": 7, "function": None}

    def test_explicit_context_dict(self) -> None:
        formatter = JSONFormatter(service_name="fanout-gateway")

        entry = json.loads(formatter.format(_record(context={"resource": "api/3"})))

        assert entry["context"] == {"resource": "api/3"}

    def test_loose_extra_fields_become_context(self) -> None:
        formatter = JSONFormatter(service_name="fanout-gateway")

        entry = json.loads(formatter.format(_record(status=500)))

        assert entry["context"]["status"] == 500

    def test_fields_set_by_other_formatters_stay_out_of_context(self) -> None:
        record = _record(status=500)
        logging.Formatter("%(asctime)s %(message)s").format(record)
        formatter = JSONFormatter(service_name="fanout-gateway")

        entry = json.loads(formatter.format(record))

        assert entry["context"] == {"status": 500}
        assert entry["message"] == "Failed get_api1"

    def test_context_can_be_disabled(self) -> None:
        formatter = JSONFormatter(service_name="fanout-gateway", include_context=False)

        entry = json.loads(formatter.format(_record(context={"resource": "api/3"})))

        assert "context" not in entry

    def test_exception_details(self) -> None:
        formatter = JSONFormatter(service_name="fanout-gateway")
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        entry = json.loads(formatter.format(record))

        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "boom"
        assert "ValueError: boom" in entry["exception"]["traceback"]
