"""Tests for structured logging helpers."""

import json
import logging

from sla_checker.shared.infrastructure.logging import (
    REDACTED,
    CustomJsonFormatter,
    log_latency,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("sla_checker.test", logging.INFO, __file__, 1, "Deadline computed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_context():
    formatter = CustomJsonFormatter("%(name)s %(levelname)s %(message)s", environment="staging")

    data = json.loads(formatter.format(make_record(correlation_id="abc-123", deadline="2024-09-02")))

    assert data["message"] == "Deadline computed"
    assert data["correlation_id"] == "abc-123"
    assert data["environment"] == "staging"
    assert data["deadline"] == "2024-09-02"
    assert data["timestamp"]


def test_formatter_redacts_secrets():
    formatter = CustomJsonFormatter("%(message)s")

    data = json.loads(formatter.format(make_record(api_key="k-123", access_token="t-456")))

    assert data["api_key"] == REDACTED
    assert data["access_token"] == REDACTED


def test_log_latency_logs_operation(caplog):
    logger = logging.getLogger("sla_checker.test")

    with caplog.at_level(logging.INFO, logger="sla_checker.test"):
        with log_latency(logger, "sla_check", duration_unit="hours"):
            pass

    record = caplog.records[-1]
    assert record.getMessage() == "sla_check completed"
    assert record.operation == "sla_check"
    assert record.duration_unit == "hours"
    assert record.latency_ms >= 0
