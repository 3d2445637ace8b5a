"""Telegram notifications for render job lifecycle events.

This package provides the complete notification hook:
- TelegramNotifier / notify: resolve credentials, format, deliver once
- format_message: pure Markdown formatter for job events
- TelegramClient: requests wrapper for the sendMessage endpoint
- Payload utilities: credential, extra text and request body resolution

Failures are never retried or swallowed; they propagate to the pipeline.
"""

from .formatter import display_filename, format_message, select_header
from .models import (
    DeliveryFailedError,
    MissingCredentialsError,
    NotificationError,
    TelegramCredentials,
)
from .payloads import build_send_message_payload, resolve_credentials, resolve_extra_text
from .service import TelegramNotifier, notify
from .telegram_client import TelegramClient

__all__ = [
    # Main entry points
    "TelegramNotifier",
    "notify",
    # Models
    "TelegramCredentials",
    # Exceptions
    "NotificationError",
    "MissingCredentialsError",
    "DeliveryFailedError",
    # Components
    "TelegramClient",
    # Utilities
    "format_message",
    "select_header",
    "display_filename",
    "resolve_credentials",
    "resolve_extra_text",
    "build_send_message_payload",
]
