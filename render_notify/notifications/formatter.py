"""Message formatting for render lifecycle notifications.

Builds the Telegram Markdown message body from a render job and an event
type. Formatting is pure: the same job and event always produce the same
text, and missing job fields only shorten the message.
"""

from typing import Dict, List, Union

from render_notify.domain.models import EventType, RenderJob

HEADERS: Dict[str, str] = {
    EventType.PRERENDER.value: "🚀 *Render Started*",
    EventType.POSTRENDER.value: "✅ *Render Finished*",
    EventType.ERROR.value: "❌ *Render Failed*",
}

DEFAULT_HEADER = "ℹ️ *Render Update*"

DETAILS_HEADING = "*Job Details:*"
BULLET = "• "


def select_header(event_type: Union[EventType, str]) -> str:
    """Return the header line for an event type.

    Args:
        event_type: Lifecycle event; unknown values get the generic header

    Returns:
        Emoji-prefixed bold header line
    """
    return HEADERS.get(EventType.value_of(event_type), DEFAULT_HEADER)


def display_filename(path: str) -> str:
    """Return the final path segment of a path or URI.

    A path without "/" (or one ending in "/") is returned unchanged.

    Args:
        path: File path or URI

    Returns:
        Display name for the message
    """
    return path.split("/")[-1] or path


def _detail(label: str, value: str) -> str:
    return f"*{label}:* `{value}`"


def build_job_details(job: RenderJob, event_type: Union[EventType, str]) -> List[str]:
    """Build the detail lines for a job, in fixed order.

    Order is job id, composition, project, output, error. A line is omitted
    when its source field is absent or empty; the others never move.

    Args:
        job: Render job descriptor
        event_type: Lifecycle event (error details appear only for "error")

    Returns:
        List of detail lines without bullet prefixes
    """
    details = []
    template = job.template

    if job.uid:
        details.append(_detail("Job ID", job.uid))

    if template is not None and template.composition:
        details.append(_detail("Composition", template.composition))

    if template is not None and template.src:
        details.append(_detail("Project", display_filename(template.src)))

    if job.output:
        details.append(_detail("Output", display_filename(job.output)))

    if EventType.value_of(event_type) == EventType.ERROR.value and job.error:
        details.append(_detail("Error", job.error))

    return details


def format_message(
    job: RenderJob,
    event_type: Union[EventType, str],
    extra_text: str = "",
) -> str:
    """Format the notification text for a render job event.

    Layout: header, blank line, "*Job Details:*" heading, one bullet per
    present detail, then (if given) a blank line and the extra text verbatim.
    The heading is emitted even when no detail applies.

    Args:
        job: Render job descriptor
        event_type: Lifecycle event (prerender, postrender, error, or other)
        extra_text: Free text appended after the details (no markup applied)

    Returns:
        Newline-joined message in Telegram legacy Markdown
    """
    lines = [
        select_header(event_type),
        "",
        DETAILS_HEADING,
        *(f"{BULLET}{detail}" for detail in build_job_details(job, event_type)),
    ]

    if extra_text:
        lines.extend(["", extra_text])

    return "\n".join(lines)
