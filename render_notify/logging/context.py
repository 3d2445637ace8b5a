"""Per-notification logging fields.

Each notification runs inside a scope that tags its log records with the
job uid and event type. Scopes live in a ContextVar, so two jobs notifying
at the same time from different threads or tasks keep separate fields.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

_EMPTY: Mapping[str, Any] = MappingProxyType({})

_fields: ContextVar[Mapping[str, Any]] = ContextVar("render_notify_log_fields", default=_EMPTY)


def get_log_context() -> Dict[str, Any]:
    """Return the fields of the active scope as a new dict."""
    return dict(_fields.get())


def push_log_context(**fields: Any) -> Token:
    """Open a scope layering ``fields`` over the active ones.

    Returns:
        Token to hand back to pop_log_context()
    """
    merged = {**_fields.get(), **fields}
    return _fields.set(MappingProxyType(merged))


def pop_log_context(token: Token) -> None:
    """Close the scope opened by push_log_context()."""
    _fields.reset(token)


def clear_log_context() -> None:
    """Drop every field in the current context. Used by tests."""
    _fields.set(_EMPTY)


@contextmanager
def log_context(**fields: Any) -> Iterator[Mapping[str, Any]]:
    """Scope logging fields to a ``with`` block.

    The previous fields come back on exit, also when the block raises.

    Example:
        >>> with log_context(job_uid="J1", event_type="postrender"):
        ...     logger.info("Sending notification")
    """
    token = push_log_context(**fields)
    try:
        yield _fields.get()
    finally:
        pop_log_context(token)


def job_log_context(job_uid: Optional[str], event_type: str):
    """Scope for one notification: tags records with job_uid and event_type."""
    return log_context(job_uid=job_uid, event_type=event_type)
