"""Query generation engine.

The engine turns a QuerySpec snapshot into the ordered list of URLs it
implies:

    QuerySpec -> subsets per mixed parameter -> product with fixed values
        -> non-empty filter -> query string -> host + url + query string

The engine holds no per-query state. The same instance can expand any
number of specs, and expanding the same spec twice gives the same URLs
in the same order.

Example:
    >>> from querygen import QueryBuilder, QueryGenerator
    >>> spec = (
    ...     QueryBuilder()
    ...     .query("PromotionsByFilter")
    ...     .host("http://localhost:8080")
    ...     .url("/promotions/by-filters")
    ...     .fix_param("promotion", "123456")
    ...     .build()
    ... )
    >>> QueryGenerator().urls(spec)
    ['http://localhost:8080/promotions/by-filters?promotion=123456']
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import click

from querygen.combinatorial.product import (
    Combination,
    count_combinations,
    expand_mixed,
    is_admissible,
    iter_combinations,
)
from querygen.combinatorial.serializer import serialize
from querygen.errors import ConfigurationError, ErrorCode, ErrorContext

if TYPE_CHECKING:
    from querygen.core.models import QuerySpec

logger = logging.getLogger(__name__)

Emitter = Callable[[str], None]

DEFAULT_WARN_THRESHOLD = 4096


@dataclass(frozen=True)
class QueryCount:
    """Combination counts for one query.

    Attributes:
        name: Query name.
        raw: Combinations before the non-empty filter.
        admissible: Combinations that will be emitted.
    """

    name: str
    raw: int
    admissible: int

    @property
    def filtered(self) -> int:
        return self.raw - self.admissible


class QueryGenerator:
    """Expands QuerySpecs into URLs.

    Attributes:
        warn_threshold: Raw combination count above which a warning is
            logged before generating. Zero disables the warning.
    """

    def __init__(self, warn_threshold: int = DEFAULT_WARN_THRESHOLD) -> None:
        self.warn_threshold = warn_threshold

    def validate(self, spec: QuerySpec) -> None:
        """Check a spec is complete enough to generate.

        Raises:
            ConfigurationError: If name, host or url is missing, or if the
                spec always filters but has no parameters.
        """
        context = ErrorContext(query_name=spec.name or None)
        for field_name, label in (("name", "Query name"), ("host", "Query host"), ("url", "Query URL")):
            if not getattr(spec, field_name):
                raise ConfigurationError(
                    f"{label} is required.",
                    field=field_name,
                    error_code=ErrorCode.MISSING_FIELD,
                    context=context,
                )
        if spec.require_non_empty and not spec.has_parameters:
            raise ConfigurationError(
                "Query is always filtered but no filters provided.",
                field="require_non_empty",
                error_code=ErrorCode.NO_FILTERS,
                context=context,
            )

    def count(self, spec: QuerySpec) -> QueryCount:
        """Count combinations without enumerating them."""
        self.validate(spec)
        return self._count(spec)

    def exceeds_threshold(self, counts: QueryCount) -> bool:
        """True when a query expands beyond ``warn_threshold``."""
        return bool(self.warn_threshold) and counts.raw > self.warn_threshold

    def _count(self, spec: QuerySpec) -> QueryCount:
        raw = count_combinations([param.size for param in spec.mixed.values()])
        admissible = raw
        # Exactly one combination has every mixed subset empty. It carries
        # no values unless a fixed parameter survives the mixed overrides.
        if spec.require_non_empty and not set(spec.fixed) - set(spec.mixed):
            admissible -= 1
        return QueryCount(name=spec.name, raw=raw, admissible=admissible)

    def combinations(self, spec: QuerySpec) -> list[Combination]:
        """Admissible combinations of a spec, in generation order."""
        self.validate(spec)
        return list(self._iter_admissible(spec))

    def iter_urls(self, spec: QuerySpec) -> Iterator[str]:
        """Validate now, then lazily yield each URL in order."""
        self.validate(spec)
        return self._iter_urls(spec)

    def urls(self, spec: QuerySpec) -> list[str]:
        return list(self.iter_urls(spec))

    def generate(self, spec: QuerySpec, emit: Emitter | None = None) -> int:
        """Emit every URL of a spec, one call per URL.

        Args:
            spec: The query to expand.
            emit: Sink receiving each URL. Defaults to ``click.echo``.

        Returns:
            Number of URLs emitted.
        """
        self.validate(spec)
        sink = emit or click.echo

        counts = self._count(spec)
        logger.info(
            f"Generating query '{spec.name}': {counts.admissible} URLs "
            f"({counts.raw} combinations, {counts.filtered} filtered)"
        )
        if self.exceeds_threshold(counts):
            logger.warning(
                f"Query '{spec.name}' expands to {counts.raw} combinations "
                f"(threshold {self.warn_threshold})"
            )

        emitted = 0
        for url in self._iter_urls(spec):
            sink(url)
            emitted += 1
        return emitted

    def _iter_admissible(self, spec: QuerySpec) -> Iterator[Combination]:
        mixed_subsets = expand_mixed({name: p.values for name, p in spec.mixed.items()})
        for combination in iter_combinations(spec.fixed_values(), mixed_subsets):
            if is_admissible(combination, spec.require_non_empty):
                yield combination

    def _iter_urls(self, spec: QuerySpec) -> Iterator[str]:
        base = spec.base_url
        for combination in self._iter_admissible(spec):
            yield f"{base}{serialize(combination)}"
