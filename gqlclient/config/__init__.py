"""
Configuration management for gqlclient.

Configuration can come from a YAML or JSON file and from ``GQLCLIENT_*``
environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import ClientConfig, GlobalConfig, LoggingConfig, LogLevel

__all__ = [
    "ConfigLoader",
    "load_config",
    "ClientConfig",
    "GlobalConfig",
    "LoggingConfig",
    "LogLevel",
]
