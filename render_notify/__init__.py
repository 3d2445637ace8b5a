"""Telegram notification hook for render pipeline lifecycle events."""

from .domain.models import EventType, RenderJob
from .notifications import (
    DeliveryFailedError,
    MissingCredentialsError,
    NotificationError,
    TelegramCredentials,
    TelegramNotifier,
    format_message,
    notify,
)

__version__ = "0.1.0"

__all__ = [
    "EventType",
    "RenderJob",
    "TelegramCredentials",
    "TelegramNotifier",
    "notify",
    "format_message",
    "NotificationError",
    "MissingCredentialsError",
    "DeliveryFailedError",
]
