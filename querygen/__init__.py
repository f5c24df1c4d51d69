"""QueryGen - combinatorial query-string generation for API filter testing.

QueryGen takes a query declaration (host, path, fixed parameters and
"mixed" parameters) and produces every URL variant it implies, so an
API's filter surface can be exercised exhaustively during manual or
automated testing.

Key Features:
    - Fixed parameters: included with all their values in every URL
    - Mixed parameters: every subset of their values, combined with
      every subset of every other mixed parameter
    - Deterministic ordering: the same declaration always yields the
      same URLs in the same order
    - Always-filter mode: skip the URL that carries no parameters
    - YAML suites, JSON/text output and a ``querygen`` CLI

Example:
    >>> from querygen import QueryBuilder
    >>> urls = []
    >>> (
    ...     QueryBuilder()
    ...     .query("ProductsByFilter")
    ...     .host("http://localhost:8080")
    ...     .url("/products/by-filters")
    ...     .always_filter()
    ...     .mix_param("colorCodingType", ["status"])
    ...     .mix_param("color", ["green", "yellow", "red"])
    ...     .generate(emit=urls.append)
    ... )
    15
    >>> urls[0]
    'http://localhost:8080/products/by-filters?color=green'
"""

__version__ = "0.1.0"

from querygen.combinatorial import (
    Combination,
    QueryCount,
    QueryGenerator,
    combine,
    encode_value,
    enumerate_subsets,
    is_admissible,
    normalize_values,
    serialize,
)
from querygen.core import (
    FixedParameter,
    MixedParameter,
    ParameterKind,
    QueryBuilder,
    QuerySpec,
)
from querygen.errors import (
    ConfigurationError,
    ErrorCode,
    InvalidHostError,
    InvalidParameterError,
    InvalidUrlError,
    QueryGenError,
    SuiteLoadError,
)

__all__ = [
    "__version__",
    # Models
    "QuerySpec",
    "FixedParameter",
    "MixedParameter",
    "ParameterKind",
    "QueryBuilder",
    # Engine
    "QueryGenerator",
    "QueryCount",
    "Combination",
    "encode_value",
    "normalize_values",
    "enumerate_subsets",
    "combine",
    "is_admissible",
    "serialize",
    # Errors
    "QueryGenError",
    "ConfigurationError",
    "InvalidHostError",
    "InvalidUrlError",
    "InvalidParameterError",
    "SuiteLoadError",
    "ErrorCode",
]
