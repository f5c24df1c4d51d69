"""Pydantic models for query suite files.

A suite file is a YAML document listing queries against a shared host::

    host: ${API_HOST:http://localhost:8080}
    queries:
      - name: ProductsByFilter
        url: /products/by-filters
        always_filter: true
        mixed:
          colorCodingType: [status]
          color: [green, yellow, red]

Mapping order in the file is the declaration order of parameters.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_value(value: Any) -> Any:
    # Unquoted YAML dates load as date objects; the API expects the text.
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return [_coerce_value(item) for item in value]
    return value


class QueryDefinition(BaseModel):
    """One query in a suite file."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    url: str
    host: str | None = None
    always_filter: bool = False
    fixed: dict[str, Any] = Field(default_factory=dict)
    mixed: dict[str, Any] = Field(default_factory=dict)

    @field_validator("fixed", "mixed", mode="before")
    @classmethod
    def coerce_parameters(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {key: _coerce_value(value) for key, value in v.items()}
        return v


class SuiteDefinition(BaseModel):
    """Top-level suite document."""

    model_config = ConfigDict(extra="forbid")

    host: str | None = None
    queries: list[QueryDefinition] = Field(min_length=1)

    def query_names(self) -> list[str]:
        return [query.name for query in self.queries]
