"""Core data models for QueryGen.

A QuerySpec is an immutable snapshot of one query declaration: where
to send it and which parameters it carries. Builders and suite loaders
produce QuerySpecs; the generation engine only reads them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from querygen.combinatorial.encoding import EncodedValues


class ParameterKind(Enum):
    """How a parameter takes part in combinations."""

    FIXED = "fix"
    MIXED = "mix"

    @classmethod
    def parse(cls, value: ParameterKind | str) -> ParameterKind:
        """Accept either a ParameterKind or its string value."""
        if isinstance(value, cls):
            return value
        return cls(value)


@dataclass(frozen=True)
class Parameter:
    """A named parameter with its normalized values.

    Attributes:
        name: Query-string key.
        values: Encoded values, in declaration order.
    """

    name: str
    values: EncodedValues

    kind = ParameterKind.FIXED

    @property
    def size(self) -> int:
        return len(self.values)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind.value, "values": list(self.values)}


@dataclass(frozen=True)
class FixedParameter(Parameter):
    """Parameter whose full value list appears in every combination."""

    kind = ParameterKind.FIXED


@dataclass(frozen=True)
class MixedParameter(Parameter):
    """Parameter that contributes one subset of its values per combination."""

    kind = ParameterKind.MIXED


def _freeze(params: Mapping[str, Parameter] | None) -> Mapping[str, Parameter]:
    return MappingProxyType(dict(params or {}))


@dataclass(frozen=True)
class QuerySpec:
    """Immutable description of one query to expand.

    Attributes:
        name: Human-readable query name.
        host: Scheme, host and port, without a trailing slash.
        url: Path component, e.g. ``/products/by-filters``.
        require_non_empty: Drop the combination that carries no values.
        fixed: Fixed parameters in declaration order.
        mixed: Mixed parameters in declaration order.
    """

    name: str = ""
    host: str = ""
    url: str = ""
    require_non_empty: bool = False
    fixed: Mapping[str, FixedParameter] = field(default_factory=dict)
    mixed: Mapping[str, MixedParameter] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fixed", _freeze(self.fixed))
        object.__setattr__(self, "mixed", _freeze(self.mixed))

    @property
    def base_url(self) -> str:
        return f"{self.host}{self.url}"

    @property
    def has_parameters(self) -> bool:
        return bool(self.fixed) or bool(self.mixed)

    def fixed_values(self) -> dict[str, EncodedValues]:
        """Fixed parameters as a plain ``name -> values`` mapping."""
        return {name: param.values for name, param in self.fixed.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "host": self.host,
            "url": self.url,
            "require_non_empty": self.require_non_empty,
            "fixed": {name: list(p.values) for name, p in self.fixed.items()},
            "mixed": {name: list(p.values) for name, p in self.mixed.items()},
        }
