"""Power-set enumeration for mixed parameters.

Every subset of a mixed parameter's values is produced exactly once,
keeping the values' declared relative order, and the subsets are then
put into a fixed order:

1. Shorter subsets first (the empty subset first, the full one last).
2. Equal lengths are ordered by an index weight
   ``sum(10 ** (len - p) * index[p])`` over the positions ``p`` of the
   subset, so subsets whose earliest elements were declared earlier
   come first.
3. Any remaining tie falls back to bit-mask order.

The ordering only looks at declaration indices, never at the values
themselves, so duplicated values are still distinct entries.

Example:
    >>> enumerate_subsets(["green", "yellow", "red"])
    [(), ('green',), ('yellow',), ('red',), ('green', 'yellow'),
     ('green', 'red'), ('yellow', 'red'), ('green', 'yellow', 'red')]
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

Subset = tuple[T, ...]


def mask_indices(mask: int, size: int) -> tuple[int, ...]:
    """Return the ascending indices of the bits set in ``mask``."""
    return tuple(i for i in range(size) if mask & (1 << i))


def subset_weight(indices: Sequence[int]) -> int:
    """Tie-break weight of a subset given its original indices."""
    length = len(indices)
    return sum(10 ** (length - p) * index for p, index in enumerate(indices))


def enumerate_index_subsets(size: int) -> list[tuple[int, ...]]:
    """Enumerate all ``2 ** size`` index subsets in canonical order."""
    keyed = []
    for mask in range(1 << size):
        indices = mask_indices(mask, size)
        keyed.append(((len(indices), subset_weight(indices), mask), indices))
    keyed.sort(key=lambda item: item[0])
    return [indices for _, indices in keyed]


def enumerate_subsets(values: Sequence[T]) -> list[Subset]:
    """Enumerate every subset of ``values`` in canonical order.

    Args:
        values: One parameter's ordered values.

    Returns:
        ``2 ** len(values)`` tuples, starting with the empty subset and
        ending with the full one.
    """
    return [
        tuple(values[i] for i in indices)
        for indices in enumerate_index_subsets(len(values))
    ]
