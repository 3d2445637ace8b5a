"""HTTP client for the Telegram Bot API.

This module provides a thin wrapper around a requests session that sends
exactly one sendMessage request per call and reports failures without
retrying.
"""

import re
from typing import Any, Dict, Optional

import requests

from render_notify.logging import get_logger

from .models import DeliveryFailedError

logger = get_logger(__name__, component="notification")

DEFAULT_API_BASE_URL = "https://api.telegram.org"

REDACTED = "<redacted>"

# Bot API paths carry the token: /bot<TOKEN>/<method>
_BOT_PATH_PATTERN = re.compile(r"/bot[^/\s'\"]+/")


def redact_token(text: str, bot_token: Optional[str] = None) -> str:
    """Remove bot tokens from text bound for logs or stderr.

    Replaces the given token wherever it appears, and any token embedded
    in a /bot<TOKEN>/ path, such as the URL inside a requests error.

    Args:
        text: Message text, typically str() of an exception
        bot_token: Token known to the caller, if any

    Returns:
        Text with tokens replaced by "<redacted>"
    """
    if bot_token:
        text = text.replace(bot_token, REDACTED)
    return _BOT_PATH_PATTERN.sub(f"/bot{REDACTED}/", text)


class TelegramClient:
    """Wrapper around requests for the Telegram sendMessage endpoint.

    The bot token is part of the endpoint URL, so URLs are redacted before
    they reach any log record.

    Attributes:
        api_base_url: Base URL of the Bot API (no trailing slash)
        timeout: Request timeout in seconds, or None for no timeout
    """

    def __init__(
        self,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client.

        Args:
            api_base_url: Base URL of the Bot API
            timeout: Request timeout in seconds (None leaves requests' default)
            session: Session to send requests with (for mocking)
        """
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def build_url(self, bot_token: str, method: str = "sendMessage") -> str:
        """Build the endpoint URL for a bot API method."""
        return f"{self.api_base_url}/bot{bot_token}/{method}"

    def redact_url(self, method: str = "sendMessage") -> str:
        return f"{self.api_base_url}/bot{REDACTED}/{method}"

    def send_message(self, bot_token: str, payload: Dict[str, Any]) -> requests.Response:
        """POST a sendMessage request.

        Args:
            bot_token: Telegram bot token
            payload: JSON body (chat_id, text, parse_mode)

        Returns:
            The HTTP response, for 2xx statuses

        Raises:
            DeliveryFailedError: On any non-2xx status
            requests.exceptions.RequestException: On transport failure,
                re-raised unchanged after logging
        """
        url = self.build_url(bot_token)
        safe_url = self.redact_url()

        logger.debug(
            f"HTTP POST request to {safe_url}",
            extra={
                "event": "notification.send.request",
                "url": safe_url,
                "timeout": self.timeout,
            },
        )

        try:
            response = self._session.post(
                url,
                json=payload,
                headers={"content-type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Failed to send Telegram message: {redact_token(str(e), bot_token)}",
                extra={
                    "event": "notification.send.failure",
                    "error_type": type(e).__name__,
                    "url": safe_url,
                },
            )
            raise

        if not 200 <= response.status_code < 300:
            error = DeliveryFailedError(response.status_code, response.text)
            logger.error(
                f"Failed to send Telegram message: {redact_token(str(error), bot_token)}",
                extra={
                    "event": "notification.send.failure",
                    "error_type": type(error).__name__,
                    "status_code": response.status_code,
                    "url": safe_url,
                },
            )
            raise error

        return response
