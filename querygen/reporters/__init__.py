"""Output sinks for generated URLs."""

from __future__ import annotations

from pathlib import Path

from querygen.reporters.base import BaseReporter, CollectingReporter
from querygen.reporters.console import ConsoleReporter, FileReporter
from querygen.reporters.json_report import JSONReporter


def create_reporter(
    output_format: str = "text",
    output_path: str | Path | None = None,
    headers: bool = False,
) -> BaseReporter:
    """Pick a reporter for an output format and optional destination file."""
    if output_format == "json":
        return JSONReporter(output_path=output_path)
    if output_format != "text":
        raise ValueError(f"Unknown output format: {output_format}")
    if output_path is not None:
        return FileReporter(output_path, headers=headers)
    return ConsoleReporter(headers=headers)


__all__ = [
    "BaseReporter",
    "CollectingReporter",
    "ConsoleReporter",
    "FileReporter",
    "JSONReporter",
    "create_reporter",
]
