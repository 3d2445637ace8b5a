"""Tests for logging configuration and formatters."""

import json
import logging

import pytest

from render_notify.logging import ComponentLoggerAdapter, get_logger
from render_notify.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from render_notify.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    """Put back the root logger state changed by configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg="Test message", level=logging.INFO, **extra):
    record = logging.LogRecord("test", level, "test.py", 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_basic():
    output = JSONFormatter().format(make_record())
    log_obj = json.loads(output)

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["timestamp"].endswith("Z")


def test_json_formatter_with_extra_fields():
    record = make_record(event="notification.send.success", status_code=200, chat_id="-1001")

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "notification.send.success"
    assert log_obj["status_code"] == 200
    assert log_obj["chat_id"] == "-1001"


def test_json_formatter_keeps_emoji():
    """Test message text is not ASCII-escaped."""
    output = JSONFormatter().format(make_record("✅ sent"))

    assert "✅ sent" in output


def test_json_formatter_stringifies_unknown_types():
    record = make_record(error=ValueError("bad"))

    assert json.loads(JSONFormatter().format(record))["error"] == "bad"


def test_contextual_filter_adds_static_and_context_fields():
    record = make_record()

    with log_context(job_uid="J1", event_type="postrender"):
        assert ContextualFilter(service="render-notify", environment="test").filter(record)

    assert record.service == "render-notify"
    assert record.environment == "test"
    assert record.job_uid == "J1"
    assert record.event_type == "postrender"


def test_contextual_filter_does_not_override_extra():
    record = make_record(job_uid="from-extra")

    with log_context(job_uid="from-context"):
        ContextualFilter().filter(record)

    assert record.job_uid == "from-extra"


def test_key_value_formatter_with_extras():
    formatter = KeyValueFormatter("%(levelname)s %(message)s")
    record = make_record(
        event="notification.send.failure",
        error_type="Timeout",
        reason="no route to host",
        retry=False,
        status_code=None,
        service="render-notify",
    )

    output = formatter.format(record)

    assert output.startswith("INFO Test message ")
    assert "error_type=Timeout" in output
    assert 'reason="no route to host"' in output
    assert "retry=false" in output
    assert "status_code=null" in output
    assert "service=" not in output
    assert output.index("error_type=") < output.index("event=")


def test_key_value_formatter_without_extras():
    formatter = KeyValueFormatter("%(levelname)s %(message)s")

    assert formatter.format(make_record()) == "INFO Test message"


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="LOUD")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="xml")


@pytest.mark.parametrize(
    "format_type,formatter_cls",
    [("json", JSONFormatter), ("key-value", KeyValueFormatter)],
)
def test_configure_logging_installs_handler(restore_root_logger, format_type, formatter_cls):
    configure_logging(level="WARNING", format_type=format_type, environment="production")

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler.formatter, formatter_cls)
    contextual = [f for f in handler.filters if isinstance(f, ContextualFilter)]
    assert contextual[0].environment == "production"


def test_get_logger_without_component():
    logger = get_logger("render_notify.test")

    assert isinstance(logger, logging.Logger)


def test_component_adapter_merges_extra():
    adapter = get_logger("render_notify.test", component="notification")

    assert isinstance(adapter, ComponentLoggerAdapter)
    msg, kwargs = adapter.process("hello", {"extra": {"event": "x"}})
    assert msg == "hello"
    assert kwargs["extra"] == {"component": "notification", "event": "x"}


def test_component_adapter_call_extra_wins():
    adapter = get_logger("render_notify.test", component="notification")

    _, kwargs = adapter.process("hello", {"extra": {"component": "cli"}})

    assert kwargs["extra"]["component"] == "cli"
