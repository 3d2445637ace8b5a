"""Notifier for render job lifecycle events.

This module provides the TelegramNotifier class and the notify() hook the
render pipeline calls on prerender, postrender and error events. Each call
resolves credentials, formats the message and performs a single delivery
attempt; every failure propagates to the caller.
"""

import logging
from typing import Any, Mapping, Optional, Union

import requests

from render_notify.domain.models import EventType, RenderJob
from render_notify.logging import get_logger
from render_notify.logging.context import job_log_context

from .formatter import format_message
from .models import MissingCredentialsError, TelegramCredentials
from .payloads import build_send_message_payload, resolve_credentials, resolve_extra_text
from .telegram_client import TelegramClient

logger = get_logger(__name__, component="notification")

JobLike = Union[RenderJob, Mapping[str, Any]]


class TelegramNotifier:
    """Sends render lifecycle notifications to a Telegram chat.

    Fallback credentials are injected at construction time rather than read
    from the environment on each call. Job-level action overrides win over
    the fallback.

    The flow for one call:
    1. Resolve bot token and chat id (job override, then fallback)
    2. Resolve extra text (override, or synthesized error text)
    3. Fail with MissingCredentialsError if either credential is absent
    4. Format the message and build the payload
    5. Deliver once via TelegramClient
    """

    def __init__(
        self,
        credentials: Optional[TelegramCredentials] = None,
        client: Optional[TelegramClient] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize notifier.

        Args:
            credentials: Fallback credentials (empty if None)
            client: Telegram client instance (creates default if None)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.credentials = credentials or TelegramCredentials()
        self.client = client or TelegramClient()
        self.logger = logger_instance or logger

    def notify(
        self,
        job: JobLike,
        settings: Optional[Any],
        event_type: Union[EventType, str],
    ) -> requests.Response:
        """Send one notification for a job event.

        Args:
            job: Render job descriptor or the pipeline's raw job mapping
            settings: Pipeline settings object; accepted and currently unused
            event_type: Lifecycle event (prerender, postrender, error, or other)

        Returns:
            The HTTP response of the confirmed delivery

        Raises:
            MissingCredentialsError: If no bot token or chat id can be resolved
            DeliveryFailedError: If the API answers with a non-2xx status
            requests.exceptions.RequestException: On transport failure
        """
        render_job = RenderJob.from_descriptor(job)
        event_value = EventType.value_of(event_type)

        with job_log_context(render_job.uid, event_value):
            credentials = resolve_credentials(render_job, self.credentials)
            extra_text = resolve_extra_text(render_job, event_value)

            if not credentials.is_complete:
                self.logger.error(
                    "Telegram botToken or chatId missing, notification not sent",
                    extra={
                        "event": "notification.credentials.missing",
                        "has_bot_token": bool(credentials.bot_token),
                        "has_chat_id": bool(credentials.chat_id),
                    },
                )
                raise MissingCredentialsError()

            text = format_message(render_job, event_value, extra_text)
            payload = build_send_message_payload(credentials.chat_id, text)

            response = self.client.send_message(credentials.bot_token, payload)

            self.logger.info(
                f"Notification sent for job {render_job.uid or 'unknown'} ({event_value})",
                extra={
                    "event": "notification.send.success",
                    "status_code": response.status_code,
                    "chat_id": credentials.chat_id,
                },
            )

            return response


def notify(
    job: JobLike,
    settings: Optional[Any],
    event_type: Union[EventType, str],
    credentials: Optional[TelegramCredentials] = None,
    client: Optional[TelegramClient] = None,
) -> requests.Response:
    """Pipeline hook: send one notification for a job event.

    Convenience wrapper around TelegramNotifier. When no credentials are
    given, the fallback is read from TG_TOKEN and TG_CHAT_ID.

    Args:
        job: Render job descriptor or raw job mapping
        settings: Pipeline settings object (unused)
        event_type: Lifecycle event
        credentials: Fallback credentials (read from environment if None)
        client: Telegram client instance (creates default if None)

    Returns:
        The HTTP response of the confirmed delivery
    """
    if credentials is None:
        credentials = TelegramCredentials.from_environment()
    notifier = TelegramNotifier(credentials=credentials, client=client)
    return notifier.notify(job, settings, event_type)
