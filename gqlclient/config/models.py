"""
Configuration models for gqlclient.

This module defines all configuration data models with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from yarl import URL


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.WARNING, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


class ClientConfig(BaseModel):
    """Endpoint and transport settings for a GraphQL client."""

    endpoint: Optional[str] = Field(default=None, description="GraphQL endpoint URL")

    # Transport settings
    timeout: float = Field(default=30.0, gt=0, description="Total request timeout in seconds")
    connect_timeout: float = Field(
        default=10.0, gt=0, description="Connection timeout in seconds"
    )
    max_connections: int = Field(default=100, ge=1, description="Connection pool size")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")

    # Headers
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
    user_agent: str = Field(
        default="gqlclient/0.1.0", description="User-Agent header"
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        """Require an absolute http(s) URL when an endpoint is configured."""
        if v is None:
            return v
        url = URL(v)
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"endpoint must be an absolute http(s) URL: {v!r}")
        return v


class GlobalConfig(BaseModel):
    """Global configuration container."""

    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
