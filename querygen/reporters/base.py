"""Abstract base reporter class for QueryGen.

Reporters are the sinks generated URLs are emitted into. The engine
only ever calls ``emit(url)``; ``start_query`` and ``finish`` let a
reporter group URLs per query and flush at the end of a run.

Design Pattern:
    The reporters follow the Strategy pattern, so the CLI can pick an
    output format at runtime without touching the engine.

Example:
    >>> reporter = CollectingReporter()
    >>> for spec in specs:
    ...     reporter.start_query(spec)
    ...     generator.generate(spec, emit=reporter.emit)
    >>> reporter.finish()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from querygen.core.models import QuerySpec


class BaseReporter(ABC):
    """Abstract base class for all QueryGen reporters.

    Attributes:
        current: The spec whose URLs are currently being emitted.
        emitted: Total URLs received across all queries.
    """

    def __init__(self) -> None:
        self.current: QuerySpec | None = None
        self.emitted = 0

    def start_query(self, spec: QuerySpec) -> None:
        """Announce the query whose URLs follow."""
        self.current = spec

    def emit(self, url: str) -> None:
        """Receive one generated URL."""
        self.emitted += 1
        self.write(url)

    @abstractmethod
    def write(self, url: str) -> None:
        """Store or print one URL."""
        ...

    def finish(self) -> str | None:
        """Flush the run. Returns rendered output for reporters that buffer."""
        return None

    def close(self) -> None:
        """Release resources. Safe to call after ``finish`` or on failure."""


class CollectingReporter(BaseReporter):
    """Keeps every URL in memory, grouped by query name."""

    def __init__(self) -> None:
        super().__init__()
        self.urls: list[str] = []
        self.by_query: dict[str, list[str]] = {}

    def start_query(self, spec: QuerySpec) -> None:
        super().start_query(spec)
        self.by_query.setdefault(spec.name, [])

    def write(self, url: str) -> None:
        self.urls.append(url)
        if self.current is not None:
            self.by_query[self.current.name].append(url)
