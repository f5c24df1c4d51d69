"""Observability helpers for QueryGen."""

from querygen.observability.logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    get_context,
    log_context,
)

__all__ = [
    "StructuredFormatter",
    "HumanReadableFormatter",
    "configure_logging",
    "log_context",
    "get_context",
]
