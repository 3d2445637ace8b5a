"""Environment variable loading and validation."""

import os
from typing import Optional

from render_notify.notifications.models import TelegramCredentials
from render_notify.notifications.telegram_client import DEFAULT_API_BASE_URL

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("json", "key-value")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        bot_token: Optional[str] = None,
        chat_id: Optional[str] = None,
        api_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_base_url = api_base_url or DEFAULT_API_BASE_URL
        self.timeout = timeout
        self.log_level = log_level or "INFO"
        self.log_format = log_format or "key-value"
        self.environment = environment or "local"

    @property
    def credentials(self) -> TelegramCredentials:
        """Fallback credentials for jobs without action overrides."""
        return TelegramCredentials(bot_token=self.bot_token, chat_id=self.chat_id)


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - TG_TOKEN: Fallback Telegram bot token
    - TG_CHAT_ID: Fallback Telegram chat id
    - TELEGRAM_API_BASE_URL: Bot API base URL (default: https://api.telegram.org)
    - TELEGRAM_TIMEOUT: Request timeout in seconds (default: no timeout)
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
    - LOG_FORMAT: json or key-value (default: key-value)
    - ENVIRONMENT: Environment label for log records (default: local)

    Missing TG_TOKEN or TG_CHAT_ID is not an error here: jobs may carry
    their own credentials, and the notifier rejects a call that ends up
    with neither.

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable has an invalid value
    """
    errors = []

    bot_token = os.getenv("TG_TOKEN") or None
    chat_id = os.getenv("TG_CHAT_ID") or None
    api_base_url = os.getenv("TELEGRAM_API_BASE_URL") or None
    timeout_str = os.getenv("TELEGRAM_TIMEOUT")
    log_level = os.getenv("LOG_LEVEL") or None
    log_format = os.getenv("LOG_FORMAT") or None
    environment = os.getenv("ENVIRONMENT") or None

    if api_base_url and not api_base_url.startswith(("http://", "https://")):
        errors.append(
            f"Invalid TELEGRAM_API_BASE_URL: '{api_base_url}'. Must start with http:// or https://."
        )

    timeout = None
    if timeout_str:
        try:
            timeout = float(timeout_str)
            if timeout <= 0:
                errors.append(
                    f"Invalid TELEGRAM_TIMEOUT: {timeout_str}. Must be a positive number of seconds."
                )
        except ValueError:
            errors.append(
                f"Invalid TELEGRAM_TIMEOUT: '{timeout_str}'. Must be a number of seconds."
            )

    if log_level:
        log_level = log_level.upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if log_format:
        log_format = log_format.lower()
        if log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(VALID_LOG_FORMATS)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        bot_token=bot_token,
        chat_id=chat_id,
        api_base_url=api_base_url,
        timeout=timeout,
        log_level=log_level,
        log_format=log_format,
        environment=environment,
    )
