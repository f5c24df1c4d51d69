"""Query suite loader with environment interpolation."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from querygen.combinatorial.engine import QueryGenerator
from querygen.config.schema import QueryDefinition, SuiteDefinition
from querygen.config.settings import QueryGenSettings
from querygen.core.builder import QueryBuilder
from querygen.core.models import QuerySpec
from querygen.errors import ErrorCode, ErrorContext, QueryGenError, SuiteLoadError

logger = logging.getLogger(__name__)


class SuiteLoader:
    """Loads a YAML suite file into QuerySpecs.

    Every query is declared through QueryBuilder, so suite files get the
    same host, URL and parameter validation as code.

    Attributes:
        path: Suite file path.
        settings: Supplies ``default_host`` for queries without one.
        interpolate_env: Expand ``${VAR}`` and ``${VAR:default}`` in strings.
        strict: Also run generation checks on every loaded spec.
    """

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

    def __init__(
        self,
        path: str | Path,
        settings: QueryGenSettings | None = None,
        interpolate_env: bool = True,
        strict: bool = True,
    ) -> None:
        self.path = Path(path)
        self.settings = settings
        self.interpolate_env = interpolate_env
        self.strict = strict

    def load(self) -> list[QuerySpec]:
        """Read, validate and build every query in the suite.

        Raises:
            SuiteLoadError: If the file is missing, not YAML, or does not
                match the suite schema.
            ConfigurationError: If a query is incomplete or has a bad
                host or URL.
            InvalidParameterError: If a parameter declaration is invalid.
        """
        suite = self.load_definition()
        default_host = suite.host or (self.settings.default_host if self.settings else None)

        generator = QueryGenerator()
        specs: list[QuerySpec] = []
        for definition in suite.queries:
            try:
                spec = self._build(definition, default_host)
                if self.strict:
                    generator.validate(spec)
            except QueryGenError as e:
                e.context.source = str(self.path)
                e.context.query_name = e.context.query_name or definition.name
                raise
            specs.append(spec)

        logger.info(f"Loaded {len(specs)} queries from {self.path}")
        return specs

    def load_definition(self) -> SuiteDefinition:
        """Read the file and validate it against the suite schema."""
        raw = self._load_from_file()
        if self.interpolate_env:
            raw = self._interpolate(raw)
        try:
            return SuiteDefinition.model_validate(raw)
        except ValidationError as e:
            raise SuiteLoadError(
                f"Suite does not match the expected schema:\n{e}",
                error_code=ErrorCode.SUITE_INVALID,
                context=self._context(),
                cause=e,
            ) from e

    def _context(self) -> ErrorContext:
        return ErrorContext(source=str(self.path))

    def _load_from_file(self) -> dict[str, Any]:
        if not self.path.exists():
            raise SuiteLoadError(
                f"Suite file not found: {self.path}",
                error_code=ErrorCode.SUITE_NOT_FOUND,
                context=self._context(),
            )

        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SuiteLoadError(
                f"Failed to parse YAML suite: {e}",
                error_code=ErrorCode.SUITE_PARSE_FAILED,
                context=self._context(),
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise SuiteLoadError(
                f"Suite must be a YAML mapping, got {type(data).__name__}",
                error_code=ErrorCode.SUITE_INVALID,
                context=self._context(),
            )
        return data

    def _interpolate(self, value: Any) -> Any:
        """Recursively interpolate environment variables in string values."""
        if isinstance(value, dict):
            return {key: self._interpolate(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._interpolate(item) for item in value]
        if isinstance(value, str):
            return self._interpolate_value(value)
        return value

    def _interpolate_value(self, value: str) -> str:
        def replace_env_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2) or ""
            return os.environ.get(var_name, default_value)

        return self.ENV_VAR_PATTERN.sub(replace_env_var, value)

    @staticmethod
    def _build(definition: QueryDefinition, default_host: str | None) -> QuerySpec:
        builder = QueryBuilder().query(definition.name)
        host = definition.host or default_host
        if host:
            builder.host(host)
        builder.url(definition.url)
        if definition.always_filter:
            builder.always_filter()
        for name, values in definition.fixed.items():
            builder.fix_param(name, values)
        for name, values in definition.mixed.items():
            builder.mix_param(name, values)
        return builder.build()


def load_suite(
    path: str | Path,
    settings: QueryGenSettings | None = None,
    strict: bool = True,
) -> list[QuerySpec]:
    """Load a suite file into QuerySpecs."""
    return SuiteLoader(path, settings=settings, strict=strict).load()
