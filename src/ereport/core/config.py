"""Configuration models for the e-Report resilience layer.

Pydantic models validate settings loaded from YAML. Environment variables
override the deployment-specific fields:

- ``EREPORT_ENV``: development, production or test
- ``EREPORT_API_URL``: backend base URL

Example YAML:
    environment: production
    locale: id
    retry:
      max_attempts: 3
      base_delay_seconds: 1.0
    notifications:
      dismiss_after_seconds: 5
    error_log:
      capacity: 200
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from ereport.core.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT_SECONDS,
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_ERROR_LOG_CAPACITY,
    DEFAULT_LOGIN_PATH,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_REFRESH_TOKEN_KEY,
    DEFAULT_TOKEN_KEY,
    NOTIFICATION_DISMISS_SECONDS,
)

Environment = Literal["development", "production", "test"]
Locale = Literal["id", "en"]

ENV_VAR_ENVIRONMENT = "EREPORT_ENV"
ENV_VAR_API_URL = "EREPORT_API_URL"


class ApiConfig(BaseModel):
    """Backend connection settings used by the API client."""

    base_url: str = Field(default=DEFAULT_API_BASE_URL, min_length=1)
    timeout_seconds: float = Field(
        default=DEFAULT_API_TIMEOUT_SECONDS, gt=0, description="Per-request timeout"
    )


class RetryConfig(BaseModel):
    """Configuration for the resilient executor's retry loop."""

    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=0,
        le=10,
        description="Retries after the initial call",
    )
    base_delay_seconds: float = Field(
        default=DEFAULT_BASE_DELAY_SECONDS,
        ge=0,
        description="Linear backoff unit; retry N waits N * base_delay_seconds",
    )


class NotificationConfig(BaseModel):
    """Configuration for transient error notifications."""

    enabled: bool = Field(default=True)
    dismiss_after_seconds: float = Field(default=NOTIFICATION_DISMISS_SECONDS, gt=0)
    suppress_duplicates: bool = Field(
        default=False,
        description="Drop a notification whose message is already on screen",
    )


class ErrorLogConfig(BaseModel):
    """Bounds for the in-memory error log."""

    capacity: int = Field(default=DEFAULT_ERROR_LOG_CAPACITY, ge=1, le=100_000)


class SessionConfig(BaseModel):
    """Session artifacts cleared by the redirect-to-login recovery."""

    token_key: str = Field(default=DEFAULT_TOKEN_KEY, min_length=1)
    refresh_token_key: str = Field(default=DEFAULT_REFRESH_TOKEN_KEY, min_length=1)
    login_path: str = Field(default=DEFAULT_LOGIN_PATH)

    @model_validator(mode="after")
    def _check_login_path(self) -> SessionConfig:
        if not self.login_path.startswith("/"):
            raise ValueError(f"login_path must be absolute, got {self.login_path!r}")
        return self


class LogConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    format: Literal["json", "console"] = Field(default="console")
    file_path: Path | None = Field(default=None)
    max_file_size_mb: int = Field(default=10, gt=0, le=1000)
    backup_count: int = Field(default=3, ge=0, le=100)
    include_timestamps: bool = Field(default=True)
    include_context: bool = Field(default=True)


class EReportConfig(BaseModel):
    """Top-level configuration for the error service."""

    environment: Environment = Field(default="development")
    locale: Locale = Field(default="id", description="Language of user-facing messages")
    api: ApiConfig = Field(default_factory=ApiConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    error_log: ErrorLogConfig = Field(default_factory=ErrorLogConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_yaml(cls, path: Path) -> EReportConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> EReportConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data or {})


def _apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    if env := environ.get(ENV_VAR_ENVIRONMENT):
        data["environment"] = env
    if api_url := environ.get(ENV_VAR_API_URL):
        data.setdefault("api", {})
        data["api"]["base_url"] = api_url
    return data


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> EReportConfig:
    """Load configuration from an optional YAML file plus environment overrides.

    Args:
        path: YAML file; defaults are used when None.
        environ: Environment mapping, ``os.environ`` when None.

    Returns:
        Validated configuration.

    Raises:
        pydantic.ValidationError: If the merged settings are invalid.
    """
    data: dict[str, Any] = {}
    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    data = _apply_env_overrides(data, os.environ if environ is None else environ)
    return EReportConfig.model_validate(data)


__all__ = [
    "ApiConfig",
    "EReportConfig",
    "ENV_VAR_API_URL",
    "ENV_VAR_ENVIRONMENT",
    "ErrorLogConfig",
    "LogConfig",
    "NotificationConfig",
    "RetryConfig",
    "SessionConfig",
    "load_config",
]
