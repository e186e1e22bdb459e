"""
Unit tests for structured logging.

Usage:
    pytest tests/unit/infrastructure/test_logger.py
"""

import json
import logging

from huissier.infrastructure.monitoring.logger import (
    JSONFormatter,
    RequestContextFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "huissier.test", logging.INFO, __file__, 10, "hello %s", ("realm",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestId:
    """Unit tests for request ID context helpers."""

    def test_set_and_reset(self):
        """Test ID is bound until reset."""
        token = set_request_id("req-1")
        try:
            assert get_request_id() == "req-1"
        finally:
            reset_request_id(token)

        assert get_request_id() is None

    def test_generated_when_missing(self):
        """Test a UUID is generated when no ID is supplied."""
        token = set_request_id(None)
        try:
            assert len(get_request_id()) == 36
        finally:
            reset_request_id(token)


class TestJSONFormatter:
    """Unit tests for JSONFormatter and RequestContextFilter."""

    def test_request_id_and_extra_fields(self):
        """Test request ID and extra= fields are emitted."""
        record = _record(step="list_channels", public_key="wallet-1")
        token = set_request_id("req-9")
        try:
            RequestContextFilter().filter(record)
        finally:
            reset_request_id(token)

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "hello realm"
        assert entry["level"] == "INFO"
        assert entry["request_id"] == "req-9"
        assert entry["step"] == "list_channels"
        assert entry["public_key"] == "wallet-1"

    def test_outside_request(self):
        """Test records outside a request carry a placeholder ID."""
        record = _record()
        RequestContextFilter().filter(record)

        entry = json.loads(JSONFormatter().format(record))

        assert entry["request_id"] == "-"
        assert "args" not in entry
