"""Configuration settings and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from querygen.core.builder import HOST_PATTERN
from querygen.errors import ErrorCode, ErrorContext, SuiteLoadError

ENV_PREFIX = "QUERYGEN_"


class QueryGenSettings(BaseSettings):
    """Runtime settings for QueryGen."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    verbose: bool = False
    log_level: str = "WARNING"
    log_format: Literal["human", "json"] = "human"
    output_format: Literal["text", "json"] = "text"
    warn_threshold: int = Field(default=4096, ge=0)
    default_host: str | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = str(v).upper()
        if level not in valid:
            raise ValueError(f"Invalid log level: {v}. Valid: {sorted(valid)}")
        return level

    @field_validator("default_host")
    @classmethod
    def validate_default_host(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not HOST_PATTERN.fullmatch(v):
            raise ValueError(f"default_host is not a valid host: {v}")
        return v[:-1] if v.endswith("/") else v

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.verbose else self.log_level


def load_settings(config_path: str | Path | None = None) -> QueryGenSettings:
    """Load settings from a YAML file and the environment.

    Priority: env vars > config file > defaults

    Raises:
        SuiteLoadError: If the file cannot be read or parsed, or a value
            is invalid.
    """
    config_data: dict[str, Any] = {}
    source = str(config_path) if config_path is not None else None

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise SuiteLoadError(
                f"Settings file not found: {config_path}",
                error_code=ErrorCode.SUITE_NOT_FOUND,
                context=ErrorContext(source=source),
            )
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SuiteLoadError(
                f"Failed to parse settings file: {e}",
                error_code=ErrorCode.SUITE_PARSE_FAILED,
                context=ErrorContext(source=source),
                cause=e,
            ) from e
        if not isinstance(config_data, dict):
            raise SuiteLoadError(
                f"Settings must be a YAML mapping, got {type(config_data).__name__}",
                error_code=ErrorCode.SUITE_INVALID,
                context=ErrorContext(source=source),
            )

    config_data.update(_get_env_overrides())

    try:
        return QueryGenSettings(**config_data)
    except ValidationError as e:
        raise SuiteLoadError(
            f"Invalid settings: {e}",
            error_code=ErrorCode.SUITE_INVALID,
            context=ErrorContext(source=source),
            cause=e,
        ) from e


def _get_env_overrides() -> dict[str, Any]:
    """Get settings overrides from ``QUERYGEN_*`` environment variables."""
    overrides: dict[str, Any] = {}
    for name in QueryGenSettings.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides
