"""Cartesian product of mixed-parameter subsets merged with fixed values.

A combination is an ordered ``name -> values`` mapping. Fixed
parameters come first in declaration order and always carry their full
value list; mixed parameters follow and carry one subset each. The
product runs in nested-loop order: the first mixed parameter is the
outer loop and the last one varies fastest.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator, Mapping, Sequence

from querygen.combinatorial.encoding import EncodedValues
from querygen.combinatorial.subsets import enumerate_subsets

logger = logging.getLogger(__name__)

Combination = dict[str, EncodedValues]


def expand_mixed(mixed: Mapping[str, Sequence[str]]) -> dict[str, list[EncodedValues]]:
    """Enumerate the subsets of every mixed parameter, keeping order."""
    expanded: dict[str, list[EncodedValues]] = {}
    for name, values in mixed.items():
        expanded[name] = enumerate_subsets(tuple(values))
        logger.debug(f"Mixed parameter '{name}': {len(values)} values, {len(expanded[name])} subsets")
    return expanded


def iter_combinations(
    fixed: Mapping[str, EncodedValues],
    mixed_subsets: Mapping[str, Sequence[EncodedValues]],
) -> Iterator[Combination]:
    """Lazily yield every merged combination in nested-loop order.

    Args:
        fixed: Fixed parameter values, in declaration order.
        mixed_subsets: Ordered subsets per mixed parameter, in
            declaration order.

    Yields:
        One new dict per combination. With no mixed parameters a single
        copy of ``fixed`` is yielded.
    """
    if not mixed_subsets:
        yield dict(fixed)
        return

    names = list(mixed_subsets)
    for choice in itertools.product(*(mixed_subsets[name] for name in names)):
        combination = dict(fixed)
        combination.update(zip(names, choice))
        yield combination


def combine(
    fixed: Mapping[str, EncodedValues],
    mixed_subsets: Mapping[str, Sequence[EncodedValues]],
) -> list[Combination]:
    """Materialize :func:`iter_combinations` into a list."""
    return list(iter_combinations(fixed, mixed_subsets))


def count_combinations(mixed_sizes: Sequence[int]) -> int:
    """Number of combinations before filtering: the product of ``2 ** size``."""
    total = 1
    for size in mixed_sizes:
        total *= 1 << size
    return total


def is_admissible(combination: Mapping[str, Sequence[str]], require_non_empty: bool) -> bool:
    """Decide whether a combination survives the non-empty filter.

    With ``require_non_empty`` set, a combination is kept only when at
    least one of its parameters carries a value.
    """
    if not require_non_empty:
        return True
    return any(len(values) > 0 for values in combination.values())
