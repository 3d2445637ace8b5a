"""Configuration management for the render notification hook."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_job_file

__all__ = [
    "EnvironmentConfig",
    "load_environment_config",
    "load_job_file",
    "ConfigurationError",
]
