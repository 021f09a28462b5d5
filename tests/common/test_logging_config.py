from __future__ import annotations

import io
import json
import logging

import pytest

from hr_timekeeping.logging_config import LogContext, configure_logging, reset_logging


@pytest.fixture
def stream():
    LogContext.clear()
    buf = io.StringIO()
    yield buf
    LogContext.clear()
    reset_logging()


def test_json_lines_carry_request_context(stream):
    configure_logging("INFO", json_format=True, handler=logging.StreamHandler(stream))
    LogContext.set(request_id="req-1", employee_id="E1")

    logging.getLogger("hr_timekeeping.ledger.service").info("Appended %s", "CLOCK_IN")

    line = json.loads(stream.getvalue().strip())
    assert line["message"] == "Appended CLOCK_IN"
    assert line["level"] == "INFO"
    assert line["request_id"] == "req-1"
    assert line["employee_id"] == "E1"


def test_configure_is_idempotent(stream):
    configure_logging("DEBUG", handler=logging.StreamHandler(stream))
    configure_logging("DEBUG", handler=logging.StreamHandler(stream))

    assert len(logging.getLogger("hr_timekeeping").handlers) == 1


def test_text_format_appends_context(stream):
    configure_logging("INFO", handler=logging.StreamHandler(stream))
    LogContext.set(request_id="req-2")

    logging.getLogger("hr_timekeeping.audit").warning("Hash mismatch")

    assert stream.getvalue().rstrip().endswith("Hash mismatch [request_id=req-2]")
