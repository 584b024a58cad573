"""Configuration for statusflow."""

import os
from enum import Enum

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "STATUSFLOW_"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class EditorConfig(BaseModel):
    """Settings for talking to the admin API and for logging."""

    api_base_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the admin API",
    )
    api_token: str | None = Field(default=None, description="Bearer token for the admin API")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Request timeout must be positive")
        return v

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Create configuration from ``STATUSFLOW_*`` environment variables."""
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()
        return cls(**values)
