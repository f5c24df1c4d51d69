"""Error types for QueryGen."""

from querygen.errors.base import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    InvalidHostError,
    InvalidParameterError,
    InvalidUrlError,
    QueryGenError,
    SuiteLoadError,
)

__all__ = [
    "ErrorCode",
    "ErrorContext",
    "QueryGenError",
    "ConfigurationError",
    "InvalidHostError",
    "InvalidUrlError",
    "InvalidParameterError",
    "SuiteLoadError",
]
