"""Data models and exceptions for the notification hook.

This module defines the credential value resolved for each delivery and
the custom exceptions raised along the notification path.
"""

import os
from dataclasses import dataclass
from typing import Optional


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class MissingCredentialsError(NotificationError):
    """Raised when no bot token or chat id is available for delivery.

    Raised before any network attempt is made.
    """

    def __init__(self, message: str = "Telegram botToken or chatId missing") -> None:
        super().__init__(message)


class DeliveryFailedError(NotificationError):
    """Raised when the Telegram API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code returned by the API
        response_text: Raw response body returned by the API
    """

    def __init__(self, status_code: int, response_text: str) -> None:
        """Initialize delivery error with the API's status and body.

        Args:
            status_code: HTTP status code (e.g., 400, 403)
            response_text: Response body as text
        """
        super().__init__(f"Telegram API {status_code}: {response_text}")
        self.status_code = status_code
        self.response_text = response_text


@dataclass(frozen=True)
class TelegramCredentials:
    """Bot token and chat id used to deliver a message.

    Either value may be missing; completeness is checked at delivery time
    because a job can still supply its own overrides.

    Attributes:
        bot_token: Telegram bot token
        chat_id: Target chat identifier
    """

    bot_token: Optional[str] = None
    chat_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """Check whether both values are present and non-empty."""
        return bool(self.bot_token) and bool(self.chat_id)

    @classmethod
    def from_environment(cls) -> "TelegramCredentials":
        """Read fallback credentials from TG_TOKEN and TG_CHAT_ID."""
        return cls(
            bot_token=os.getenv("TG_TOKEN") or None,
            chat_id=os.getenv("TG_CHAT_ID") or None,
        )
