"""Custom exception hierarchy for QueryGen.

QueryGen errors are raised synchronously and never recovered from
internally. Configuration is validated before any combination is
computed, so a run either produces its whole ordered URL sequence or
nothing at all.

All QueryGen errors inherit from QueryGenError and include:
- error_code: A unique ErrorCode enum for categorization
- context: ErrorContext with query/parameter details
- suggestions: List of actionable steps to resolve the issue

Example:
    try:
        QueryBuilder().query("Sales").url("/sales").generate()
    except ConfigurationError as e:
        print(f"Error: {e}")
        print(f"Suggestions: {e.suggestions}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for QueryGen.

    Error codes are organized by category:
    - E1xx: Query configuration errors
    - E2xx: Parameter declaration errors
    - E3xx: Suite and settings file errors
    - E9xx: Unknown/internal errors
    """

    # Configuration errors (E1xx)
    INVALID_CONFIG = "E100"
    MISSING_FIELD = "E101"
    NO_FILTERS = "E102"
    INVALID_HOST = "E103"
    INVALID_URL = "E104"
    INVALID_NAME = "E105"

    # Parameter errors (E2xx)
    INVALID_PARAMETER = "E200"
    INVALID_PARAMETER_NAME = "E201"
    INVALID_PARAMETER_KIND = "E202"
    INVALID_PARAMETER_VALUE = "E203"

    # Suite errors (E3xx)
    SUITE_NOT_FOUND = "E301"
    SUITE_PARSE_FAILED = "E302"
    SUITE_INVALID = "E303"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "configuration"
        elif code_num < 300:
            return "parameter"
        elif code_num < 400:
            return "suite"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context for error logging and debugging.

    Attributes:
        query_name: Name of the query being configured or generated
        parameter: Name of the offending parameter (if any)
        source: File the query was loaded from (if any)
        extra: Additional context-specific information
        timestamp: When the error occurred
    """

    query_name: str | None = None
    parameter: str | None = None
    source: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "query_name": self.query_name,
            "parameter": self.parameter,
            "source": self.source,
            "extra": self.extra or None,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.source:
            parts.append(f"file={self.source}")
        if self.query_name:
            parts.append(f"query={self.query_name}")
        if self.parameter:
            parts.append(f"param={self.parameter}")
        return " > ".join(parts) if parts else "unknown location"


class QueryGenError(Exception):
    """Base exception for all QueryGen errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with query details
        suggestions: List of actionable steps to resolve the issue
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [f"Error [{self.error_code.value}]: {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.cause is not None:
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "category": self.error_code.category,
            "message": self.message,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(QueryGenError):
    """A query is not ready to be generated.

    Raised before generation starts when the name, host or URL is
    missing, or when a query is set to always filter but declares no
    parameters at all.
    """

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid query configuration"
    default_suggestions = [
        "Every query needs a name, a host and a URL path",
        "always_filter requires at least one fixed or mixed parameter",
    ]

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        return result


class InvalidHostError(ConfigurationError):
    """Host does not look like ``[http[s]://]hostname[:port][/]``."""

    error_code = ErrorCode.INVALID_HOST
    default_message = "Invalid host"
    default_suggestions = [
        "Use a host like 'http://localhost:8080' or 'api.example.com'",
        "Do not include a path in the host; pass it with url() instead",
    ]


class InvalidUrlError(ConfigurationError):
    """URL path does not match ``(/segment)+``."""

    error_code = ErrorCode.INVALID_URL
    default_message = "Invalid URL path"
    default_suggestions = [
        "URL paths start with '/' and have no empty segments, e.g. '/products/by-filters'",
        "Do not end the URL path with '/'",
        "Query strings are generated; do not include '?' in the path",
    ]


class InvalidParameterError(QueryGenError):
    """A parameter declaration was rejected.

    Raised at the point of declaration when the name is empty or not a
    string, the parameter kind is unknown, or a value cannot be encoded.
    """

    error_code = ErrorCode.INVALID_PARAMETER
    default_message = "Invalid parameter"
    default_suggestions = [
        "Parameter names must be non-empty strings",
        "Parameter kinds are 'fix' and 'mix'",
        "Parameter values must be strings, numbers or booleans",
    ]

    def __init__(
        self,
        message: str | None = None,
        name: Any = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.name = name
        self.value = value
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["name"] = repr(self.name)
        result["value"] = repr(self.value)
        return result


class SuiteLoadError(QueryGenError):
    """A suite or settings file could not be loaded.

    Wraps file system, YAML and schema errors. The original exception is
    available as ``cause``.
    """

    error_code = ErrorCode.SUITE_INVALID
    default_message = "Failed to load query suite"
    default_suggestions = [
        "Check the file path exists and is readable",
        "Check the YAML syntax with a YAML linter",
        "Run 'querygen validate <suite>' for detailed errors",
    ]
