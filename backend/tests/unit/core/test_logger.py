"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from sessionauth.core.logger import (
    JSONFormatter,
    RequestIdFilter,
    bind_request_id,
    configure_logging,
)


def _record(msg: str = "session_created", **extra) -> logging.LogRecord:
    record = logging.LogRecord("sessionauth.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_json_formatter_renders_known_extras() -> None:
    record = _record(token_fp="abc123", status="CREATED", user_id=42)
    RequestIdFilter().filter(record)

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "session_created"
    assert payload["token_fp"] == "abc123"
    assert payload["status"] == "CREATED"
    assert "user_id" not in payload


def test_bound_request_id_reaches_records() -> None:
    with bind_request_id("req-1") as rid:
        record = _record()
        RequestIdFilter().filter(record)

    assert rid == "req-1"
    assert record.request_id == "req-1"

    outside = _record()
    RequestIdFilter().filter(outside)
    assert outside.request_id is None


def test_bind_request_id_generates_one_when_missing() -> None:
    with bind_request_id() as rid:
        record = _record()
        RequestIdFilter().filter(record)

    assert rid
    assert record.request_id == rid
