"""Tests for the command-line entry point."""

import json
import logging
from unittest.mock import patch

import pytest
import requests

from render_notify.config.exceptions import ConfigurationError
from render_notify.main import build_parser, main
from render_notify.notifications.models import DeliveryFailedError, MissingCredentialsError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TG_TOKEN", "TG_CHAT_ID", "TELEGRAM_TIMEOUT", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def job_file(tmp_path):
    path = tmp_path / "job.json"
    path.write_text(
        json.dumps(
            {
                "uid": "J1",
                "template": {"composition": "Comp 1", "src": "/tmp/proj.aep"},
                "output": "/out/final.mp4",
            }
        ),
        encoding="utf-8",
    )
    return path


def test_parser_requires_job_and_event():
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args([])

    assert exc_info.value.code == 2


@patch("render_notify.main.TelegramNotifier")
def test_main_success(mock_notifier_cls, job_file, monkeypatch):
    monkeypatch.setenv("TG_TOKEN", "123:ABC")
    monkeypatch.setenv("TG_CHAT_ID", "-1001")

    exit_code = main(["--job", str(job_file), "--event", "postrender"])

    assert exit_code == 0
    credentials = mock_notifier_cls.call_args.kwargs["credentials"]
    assert credentials.bot_token == "123:ABC"
    assert credentials.chat_id == "-1001"
    job, settings, event = mock_notifier_cls.return_value.notify.call_args.args
    assert job.uid == "J1"
    assert settings is None
    assert event == "postrender"


@patch("render_notify.main.TelegramNotifier")
def test_main_text_override(mock_notifier_cls, job_file):
    main(["--job", str(job_file), "--event", "prerender", "--text", "Queued by CI"])

    job = mock_notifier_cls.return_value.notify.call_args.args[0]
    assert job.action.text == "Queued by CI"


@patch("render_notify.main.configure_logging")
@patch("render_notify.main.TelegramNotifier")
def test_main_log_level_override(mock_notifier_cls, mock_configure_logging, job_file, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    main(["--job", str(job_file), "--event", "error", "--log-level", "DEBUG"])

    assert mock_configure_logging.call_args.kwargs["level"] == "DEBUG"


def test_main_missing_credentials(job_file, capsys):
    """Test the credential gate maps to exit code 1."""
    with patch("render_notify.notifications.telegram_client.TelegramClient.send_message") as mock_send:
        exit_code = main(["--job", str(job_file), "--event", "postrender"])

    assert exit_code == 1
    mock_send.assert_not_called()
    assert "Notification Error" in capsys.readouterr().err


@pytest.mark.parametrize(
    "error,prefix",
    [
        (MissingCredentialsError(), "Notification Error"),
        (DeliveryFailedError(403, "Forbidden"), "Notification Error"),
        (requests.exceptions.ConnectionError("unreachable"), "Transport Error"),
    ],
)
@patch("render_notify.main.TelegramNotifier")
def test_main_delivery_errors(mock_notifier_cls, job_file, capsys, error, prefix):
    mock_notifier_cls.return_value.notify.side_effect = error

    exit_code = main(["--job", str(job_file), "--event", "postrender"])

    assert exit_code == 1
    assert prefix in capsys.readouterr().err


def test_main_configuration_error(tmp_path, capsys):
    exit_code = main(["--job", str(tmp_path / "missing.json"), "--event", "postrender"])

    assert exit_code == 1
    assert "Configuration Error" in capsys.readouterr().err


@patch("render_notify.main.load_environment_config")
def test_main_invalid_environment(mock_load_env, job_file, capsys):
    mock_load_env.side_effect = ConfigurationError("Environment variable validation failed")

    exit_code = main(["--job", str(job_file), "--event", "postrender"])

    assert exit_code == 1
    assert "Environment variable validation failed" in capsys.readouterr().err


@patch("render_notify.main.TelegramNotifier")
def test_main_transport_error_redacts_token(mock_notifier_cls, job_file, monkeypatch, capsys):
    """Test stderr never shows the bot token from a requests error."""
    monkeypatch.setenv("TG_TOKEN", "SECRET-TOKEN-123")
    monkeypatch.setenv("TG_CHAT_ID", "-1001")
    mock_notifier_cls.return_value.notify.side_effect = requests.exceptions.ConnectionError(
        "Max retries exceeded with url: /botSECRET-TOKEN-123/sendMessage"
    )

    exit_code = main(["--job", str(job_file), "--event", "postrender"])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "SECRET-TOKEN-123" not in err
    assert "/bot<redacted>/sendMessage" in err


@patch("render_notify.main.TelegramNotifier")
def test_main_transport_error_redacts_job_token(mock_notifier_cls, job_file, capsys):
    """Test tokens from job overrides are caught by the URL pattern."""
    mock_notifier_cls.return_value.notify.side_effect = requests.exceptions.ConnectionError(
        "Max retries exceeded with url: /botJOB-TOKEN-9/sendMessage"
    )

    main(["--job", str(job_file), "--event", "postrender"])

    assert "JOB-TOKEN-9" not in capsys.readouterr().err
