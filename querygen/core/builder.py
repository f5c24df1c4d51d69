"""Fluent builder for QuerySpecs.

Example:
    >>> from querygen import QueryBuilder
    >>> count = (
    ...     QueryBuilder()
    ...     .query("Sales")
    ...     .host("http://localhost:9999")
    ...     .url("/sales")
    ...     .fix_param("sku", "1232456")
    ...     .mix_param("class", ["c1", "c2"])
    ...     .mix_param("department", ["d1", "d2", "d3"])
    ...     .generate()
    ... )
"""

from __future__ import annotations

import logging
import re
from typing import Any

from querygen.combinatorial.encoding import normalize_values
from querygen.combinatorial.engine import Emitter, QueryGenerator
from querygen.core.models import (
    FixedParameter,
    MixedParameter,
    ParameterKind,
    QuerySpec,
)
from querygen.errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    InvalidHostError,
    InvalidParameterError,
    InvalidUrlError,
)

logger = logging.getLogger(__name__)

HOST_PATTERN = re.compile(r"^(https?://)?([^/:]+)(:[0-9]+)?(/)?$")
URL_PATTERN = re.compile(r"^(/([^/]+))+$")


class QueryBuilder:
    """Accumulates one query declaration at a time.

    ``query()`` starts a new declaration and discards everything set
    before it. Every other method validates its input immediately and
    returns the builder, so calls can be chained. ``build()`` returns an
    immutable QuerySpec snapshot of the current state.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> QueryBuilder:
        """Clear name, host, url, flag and all parameters."""
        self._name = ""
        self._host = ""
        self._url = ""
        self._require_non_empty = False
        self._fixed: dict[str, FixedParameter] = {}
        self._mixed: dict[str, MixedParameter] = {}
        return self

    def _context(self, parameter: Any = None) -> ErrorContext:
        if parameter is not None and not isinstance(parameter, str):
            parameter = repr(parameter)
        return ErrorContext(query_name=self._name or None, parameter=parameter or None)

    def query(self, name: str) -> QueryBuilder:
        """Reset the builder and start a query called ``name``."""
        if not isinstance(name, str) or not name:
            raise ConfigurationError(
                "The `query` method expects a non-empty string name.",
                field="name",
                error_code=ErrorCode.INVALID_NAME,
            )
        self.reset()
        self._name = name
        return self

    def host(self, host: str) -> QueryBuilder:
        """Set the host, e.g. ``http://localhost:8080``. A trailing slash is dropped."""
        if not isinstance(host, str) or not host or not HOST_PATTERN.fullmatch(host):
            raise InvalidHostError(
                f"The `host` method expects a valid host, got {host!r}.",
                field="host",
                context=self._context(),
            )
        self._host = host[:-1] if host.endswith("/") else host
        return self

    def url(self, url: str) -> QueryBuilder:
        """Set the URL path, of the form ``(/segment)+``."""
        if not isinstance(url, str) or not url or not URL_PATTERN.fullmatch(url):
            raise InvalidUrlError(
                f"The `url` method expects a valid URL of the form `(/.+)+`, got {url!r}.",
                field="url",
                context=self._context(),
            )
        self._url = url
        return self

    def always_filter(self, enabled: bool = True) -> QueryBuilder:
        """Never generate the URL that carries no parameters."""
        self._require_non_empty = enabled
        return self

    def fix_param(self, name: str, values: Any) -> QueryBuilder:
        """Add a parameter whose values appear in every URL."""
        return self.add_param(ParameterKind.FIXED, name, values)

    def mix_param(self, name: str, values: Any) -> QueryBuilder:
        """Add a parameter whose values are combined with each other and other mixed parameters."""
        return self.add_param(ParameterKind.MIXED, name, values)

    def add_param(self, kind: ParameterKind | str, name: str, values: Any) -> QueryBuilder:
        """Add a fixed or mixed parameter.

        Values are normalized to a tuple of encoded strings. A parameter
        with no values is ignored. Redeclaring a name replaces its values
        and keeps its position.

        Raises:
            InvalidParameterError: If the kind is unknown, the name is not a
                non-empty string, or a value cannot be encoded.
        """
        try:
            param_kind = ParameterKind.parse(kind)
        except ValueError as e:
            raise InvalidParameterError(
                f"Parameters are either 'fix' or 'mix', got {kind!r}.",
                name=name,
                error_code=ErrorCode.INVALID_PARAMETER_KIND,
                context=self._context(name),
                cause=e,
            ) from e

        if not isinstance(name, str) or not name:
            method = "fix_param" if param_kind is ParameterKind.FIXED else "mix_param"
            raise InvalidParameterError(
                f"The `{method}` method expects a non-empty string name.",
                name=name,
                error_code=ErrorCode.INVALID_PARAMETER_NAME,
                context=self._context(repr(name)),
            )

        encoded = normalize_values(values, name=name, context=self._context(name))
        if not encoded:
            logger.debug(f"Ignoring {param_kind.value} parameter '{name}' with no values")
            return self

        if param_kind is ParameterKind.FIXED:
            self._fixed[name] = FixedParameter(name=name, values=encoded)
        else:
            self._mixed[name] = MixedParameter(name=name, values=encoded)
        return self

    def build(self) -> QuerySpec:
        """Snapshot the current declaration."""
        return QuerySpec(
            name=self._name,
            host=self._host,
            url=self._url,
            require_non_empty=self._require_non_empty,
            fixed=self._fixed,
            mixed=self._mixed,
        )

    def generate(
        self,
        emit: Emitter | None = None,
        generator: QueryGenerator | None = None,
    ) -> int:
        """Build the spec and emit all of its URLs.

        Args:
            emit: Sink receiving each URL. Defaults to stdout.
            generator: Engine to use. A default one is created if omitted.

        Returns:
            Number of URLs emitted.
        """
        return (generator or QueryGenerator()).generate(self.build(), emit)
