"""
Tests for structured logging configuration.
"""

import json
import logging
import sys

import pytest
import structlog

from core.logging import bind_context, clear_context, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    yield
    clear_context()
    logging.basicConfig(stream=sys.__stderr__, force=True)
    structlog.reset_defaults()


def _last_json_line(output):
    lines = [line for line in output.splitlines() if line.strip()]
    return json.loads(lines[-1])


def test_json_logs(capsys, restore_logging):
    configure_logging(json_logs=True, log_level="INFO")

    get_logger("tests.logging.json").info("Category searched", category="diamond", rows=2)

    entry = _last_json_line(capsys.readouterr().out)
    assert entry["event"] == "Category searched"
    assert entry["category"] == "diamond"
    assert entry["rows"] == 2
    assert entry["level"] == "info"
    assert entry["logger"] == "tests.logging.json"
    assert "timestamp" in entry


def test_bound_context_is_merged(capsys, restore_logging):
    configure_logging(json_logs=True)

    bind_context(request_id="abc123", path="/api/search")
    get_logger("tests.logging.context").info("Search completed")

    entry = _last_json_line(capsys.readouterr().out)
    assert entry["request_id"] == "abc123"
    assert entry["path"] == "/api/search"


def test_level_filters_debug(capsys, restore_logging):
    configure_logging(json_logs=True, log_level="WARNING")

    get_logger("tests.logging.level").info("hidden")

    assert "hidden" not in capsys.readouterr().out


def test_noisy_client_loggers_quieted(restore_logging):
    configure_logging()

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("postgrest").level == logging.WARNING
