"""Domain models for render job descriptors."""

from .models import EventType, JobAction, RenderJob, TemplateDescriptor

__all__ = ["EventType", "JobAction", "RenderJob", "TemplateDescriptor"]
