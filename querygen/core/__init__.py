"""Core models and builder for QueryGen."""

from querygen.core.builder import HOST_PATTERN, URL_PATTERN, QueryBuilder
from querygen.core.models import (
    FixedParameter,
    MixedParameter,
    Parameter,
    ParameterKind,
    QuerySpec,
)

__all__ = [
    "QueryBuilder",
    "QuerySpec",
    "Parameter",
    "FixedParameter",
    "MixedParameter",
    "ParameterKind",
    "HOST_PATTERN",
    "URL_PATTERN",
]
