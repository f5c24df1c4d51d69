"""JSON reporter for generated URLs.

Buffers URLs per query and renders a single document on ``finish``::

    {
      "generated_at": "...",
      "total": 16,
      "queries": [
        {"name": "...", "host": "...", "url": "...", "count": 15, "urls": [...]}
      ]
    }
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from querygen.reporters.base import BaseReporter

if TYPE_CHECKING:
    from querygen.core.models import QuerySpec


class JSONReporter(BaseReporter):
    """Collects URLs and renders them as one JSON document.

    Attributes:
        output_path: If set, ``finish`` also writes the document there.
        indent: JSON indentation; None for compact output.
    """

    def __init__(self, output_path: str | Path | None = None, indent: int | None = 2) -> None:
        super().__init__()
        self.output_path = Path(output_path) if output_path else None
        self.indent = indent
        self._queries: list[dict[str, Any]] = []

    def start_query(self, spec: QuerySpec) -> None:
        super().start_query(spec)
        self._queries.append(
            {
                "name": spec.name,
                "host": spec.host,
                "url": spec.url,
                "always_filter": spec.require_non_empty,
                "count": 0,
                "urls": [],
            }
        )

    def write(self, url: str) -> None:
        if not self._queries:
            self._queries.append({"name": None, "host": None, "url": None, "count": 0, "urls": []})
        entry = self._queries[-1]
        entry["urls"].append(url)
        entry["count"] += 1

    def build_report(self) -> dict[str, Any]:
        return {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "total": self.emitted,
            "queries": self._queries,
        }

    def finish(self) -> str:
        rendered = json.dumps(self.build_report(), indent=self.indent)
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(rendered + "\n", encoding="utf-8")
        return rendered
