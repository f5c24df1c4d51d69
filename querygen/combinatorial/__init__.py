"""Combinatorial query expansion for QueryGen.

Each mixed parameter is expanded into all subsets of its values, the
subsets of all mixed parameters are multiplied together, fixed values
are merged into every combination, and each combination is rendered as
a query string.

Architecture:
    encode_value -> enumerate_subsets -> combine -> is_admissible
        -> serialize -> QueryGenerator

Modules:
    encoding: encode_value, normalize_values
    subsets: enumerate_subsets, subset_weight
    product: combine, iter_combinations, count_combinations, is_admissible
    serializer: serialize, parse_query
    engine: QueryGenerator, QueryCount
"""

from querygen.combinatorial.encoding import (
    EncodedValues,
    ParameterValue,
    encode_value,
    is_absent,
    normalize_values,
)
from querygen.combinatorial.engine import QueryCount, QueryGenerator
from querygen.combinatorial.product import (
    Combination,
    combine,
    count_combinations,
    expand_mixed,
    is_admissible,
    iter_combinations,
)
from querygen.combinatorial.serializer import parse_query, serialize
from querygen.combinatorial.subsets import (
    enumerate_index_subsets,
    enumerate_subsets,
    subset_weight,
)

__all__ = [
    # Encoding
    "ParameterValue",
    "EncodedValues",
    "encode_value",
    "is_absent",
    "normalize_values",
    # Subsets
    "enumerate_subsets",
    "enumerate_index_subsets",
    "subset_weight",
    # Product
    "Combination",
    "combine",
    "iter_combinations",
    "expand_mixed",
    "count_combinations",
    "is_admissible",
    # Serializer
    "serialize",
    "parse_query",
    # Engine
    "QueryGenerator",
    "QueryCount",
]
