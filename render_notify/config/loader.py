"""Job descriptor file loading."""

from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from render_notify.domain.models import RenderJob

from .exceptions import ConfigurationError


def load_job_file(job_path: Union[str, Path]) -> RenderJob:
    """
    Load a render job descriptor from a JSON or YAML file.

    JSON is parsed by the YAML loader as well, so both formats share one path.

    Args:
        job_path: Path to the job file

    Returns:
        Validated RenderJob

    Raises:
        ConfigurationError: If the file is missing, unparsable, not a mapping,
            or has wrongly typed fields
    """
    job_file = Path(job_path)

    try:
        with open(job_file, "r", encoding="utf-8") as f:
            job_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Job file not found: {job_file}",
            suggestions=[f"Ensure {job_file} exists and is readable"],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse job file: {e}",
            suggestions=[
                "Check the JSON or YAML syntax of the job file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read job file: {e}",
            suggestions=[f"Check permissions of {job_file}"],
        )

    if not isinstance(job_dict, dict):
        raise ConfigurationError(
            f"Job file must contain a mapping, got {type(job_dict).__name__}",
            suggestions=["Export the job object from the render pipeline as JSON"],
        )

    try:
        return RenderJob.from_descriptor(job_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append(f"{field_path}: {error['msg']}")
        raise ConfigurationError(
            "Job descriptor validation failed",
            errors=errors,
            suggestions=["template must be a mapping with composition and src keys"],
        )
