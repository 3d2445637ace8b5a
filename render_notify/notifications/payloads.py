"""Payload resolution for Telegram notifications.

This module resolves the per-call inputs of a delivery (credentials and
extra text) from the job's action overrides and the fallback configuration,
and builds the sendMessage request body.
"""

from typing import Dict, Optional, Union

from render_notify.domain.models import EventType, RenderJob

from .models import TelegramCredentials

PARSE_MODE = "Markdown"


def resolve_credentials(
    job: RenderJob,
    fallback: Optional[TelegramCredentials] = None,
) -> TelegramCredentials:
    """Resolve bot token and chat id for a job.

    Each value is taken from the job's action override when present,
    otherwise from the fallback credentials. Completeness is not checked here.

    Args:
        job: Render job descriptor
        fallback: Process-wide credentials (may be None or partial)

    Returns:
        TelegramCredentials with the resolved values
    """
    fallback = fallback or TelegramCredentials()
    action = job.action

    bot_token = (action.bot_token if action else None) or fallback.bot_token
    chat_id = (action.chat_id if action else None) or fallback.chat_id

    return TelegramCredentials(bot_token=bot_token or None, chat_id=chat_id or None)


def resolve_extra_text(job: RenderJob, event_type: Union[EventType, str]) -> str:
    """Resolve the free text appended to the message.

    Uses the action's text override when present. For error events without
    an override, synthesizes "Error: <message>" from the job's error.

    Args:
        job: Render job descriptor
        event_type: Lifecycle event

    Returns:
        Extra text, or an empty string
    """
    if job.action is not None and job.action.text:
        return job.action.text

    if EventType.value_of(event_type) == EventType.ERROR.value and job.error:
        return f"Error: {job.error}"

    return ""


def build_send_message_payload(chat_id: str, text: str) -> Dict[str, str]:
    """Build the JSON body for the sendMessage endpoint.

    Args:
        chat_id: Target chat identifier
        text: Formatted message text

    Returns:
        Dictionary with chat_id, text and parse_mode keys
    """
    return {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": PARSE_MODE,
    }
