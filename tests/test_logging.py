"""
Tests for structlog setup.
"""

import io
import json
import logging

import pytest
import structlog

from src.school_timer.logging import get_logger, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers, root.level = handlers, level


def test_json_output_goes_to_given_stream(restore_logging):
    stream = io.StringIO()
    setup_logging(json_output=True, log_level="debug", stream=stream)

    get_logger("tests.logging").info("status_changed", status="active", period="1교시")

    record = json.loads(stream.getvalue().strip())
    assert record["event"] == "status_changed"
    assert record["level"] == "info"
    assert record["period"] == "1교시"
    assert "timestamp" in record


def test_level_filters_events(restore_logging):
    stream = io.StringIO()
    setup_logging(json_output=True, log_level="WARNING", stream=stream)

    get_logger("tests.logging").info("schedule_loaded")

    assert stream.getvalue() == ""
