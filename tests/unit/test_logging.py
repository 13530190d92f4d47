from __future__ import annotations

import json
import logging
from pathlib import Path

from gymms.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_MEMBER_ID = 10
EXPECTED_COUNT = 3


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.member_id = EXPECTED_MEMBER_ID
    record.path = Path("members.dat")

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["member_id"] == EXPECTED_MEMBER_ID
    assert payload["path"] == "members.dat"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"count": EXPECTED_COUNT}

    payload = json.loads(_json_formatter(record))

    assert payload["count"] == EXPECTED_COUNT


def test_configure_logging_installs_requested_formatter() -> None:
    configure_logging(level="DEBUG", json_logs=True)
    root = logging.getLogger()
    try:
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        configure_logging(level="WARNING")


def test_configure_logging_accepts_lowercase_level_for_console_output() -> None:
    configure_logging(level="info")
    root = logging.getLogger()
    try:
        assert root.level == logging.INFO
        assert all(not isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        configure_logging(level="WARNING")
