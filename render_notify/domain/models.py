"""Domain models for render job descriptors and lifecycle events.

This module defines the read-only view this package takes of the render
pipeline's job object:
- RenderJob: one render task (identifier, template, output, error state)
- TemplateDescriptor: the project/composition being rendered
- JobAction: per-invocation overrides for the notification hook
- EventType: lifecycle stages the pipeline reports
"""

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventType(str, Enum):
    """Lifecycle stages reported by the render pipeline.

    The set is open by convention: any other string is accepted wherever an
    event type is expected and is treated as a generic update.
    """

    PRERENDER = "prerender"
    POSTRENDER = "postrender"
    ERROR = "error"

    @classmethod
    def value_of(cls, event_type: Union["EventType", str]) -> str:
        """Return the plain string for an event type or a raw event name."""
        if isinstance(event_type, cls):
            return event_type.value
        return event_type


def _coerce_optional_str(v: Any) -> Optional[str]:
    """Coerce scalars (and error objects) to str, keeping None as None."""
    if v is None:
        return None
    if isinstance(v, str):
        return v
    return str(v)


class TemplateDescriptor(BaseModel):
    """Template reference of a render job."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    composition: Optional[str] = Field(None, description="Composition name")
    src: Optional[str] = Field(None, description="Project source path or URI")

    @field_validator("composition", "src", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Optional[str]:
        """Composition names such as 2024 arrive as numbers from YAML."""
        return _coerce_optional_str(v)


class JobAction(BaseModel):
    """Per-invocation overrides attached to the job by the pipeline."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    bot_token: Optional[str] = Field(None, alias="botToken")
    chat_id: Optional[str] = Field(None, alias="chatId")
    text: Optional[str] = None

    @field_validator("bot_token", "chat_id", "text", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Optional[str]:
        """Chat ids are frequently numeric in pipeline configs."""
        return _coerce_optional_str(v)


class RenderJob(BaseModel):
    """Render job descriptor as seen by the notification hook.

    Every field is optional; missing fields simply shorten the formatted
    message. Unknown keys from the pipeline's job object are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        json_schema_extra={
            "example": {
                "uid": "J1",
                "template": {"composition": "Comp 1", "src": "/tmp/proj.aep"},
                "output": "/out/final.mp4",
                "action": {"chatId": "123456", "text": "Nightly batch"},
            }
        },
    )

    uid: Optional[str] = Field(None, description="Unique job identifier")
    template: Optional[TemplateDescriptor] = None
    output: Optional[str] = Field(None, description="Output path of the render")
    error: Optional[str] = Field(None, description="Error message of a failed job")
    action: Optional[JobAction] = None

    @field_validator("uid", "output", "error", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Optional[str]:
        """Accept numeric ids and exception objects from the pipeline."""
        return _coerce_optional_str(v)

    @classmethod
    def from_descriptor(cls, job: Union["RenderJob", Mapping[str, Any]]) -> "RenderJob":
        """Build a RenderJob from a job object or a raw mapping.

        Args:
            job: Existing RenderJob (returned unchanged) or a mapping in the
                pipeline's own key style (camelCase action fields)

        Returns:
            Validated RenderJob

        Raises:
            pydantic.ValidationError: If the mapping has wrongly typed fields
        """
        if isinstance(job, cls):
            return job
        return cls.model_validate(dict(job))

