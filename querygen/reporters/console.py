"""Line-oriented reporters: stdout and plain text files."""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING

import click

from querygen.reporters.base import BaseReporter

if TYPE_CHECKING:
    from querygen.core.models import QuerySpec


class ConsoleReporter(BaseReporter):
    """Echoes one URL per line.

    Attributes:
        headers: Print a ``# <query name>`` line before each query.
        file: Destination passed to ``click.echo``. Defaults to stdout.
    """

    def __init__(self, headers: bool = False, file: IO[str] | None = None) -> None:
        super().__init__()
        self.headers = headers
        self.file = file

    def start_query(self, spec: QuerySpec) -> None:
        super().start_query(spec)
        if self.headers:
            click.echo(f"# {spec.name}", file=self.file)

    def write(self, url: str) -> None:
        click.echo(url, file=self.file)


class FileReporter(BaseReporter):
    """Writes one URL per line to a text file.

    The file is opened lazily on the first write and closed by ``finish``.
    Parent directories are created as needed.
    """

    def __init__(self, path: str | Path, headers: bool = False) -> None:
        super().__init__()
        self.path = Path(path)
        self.headers = headers
        self._handle: IO[str] | None = None

    def _open(self) -> IO[str]:
        if self._handle is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(self.path, "w", encoding="utf-8")
        return self._handle

    def start_query(self, spec: QuerySpec) -> None:
        super().start_query(spec)
        if self.headers:
            self._open().write(f"# {spec.name}\n")

    def write(self, url: str) -> None:
        self._open().write(f"{url}\n")

    def finish(self) -> str | None:
        # Create the file even when nothing was emitted.
        handle = self._open()
        handle.close()
        self._handle = None
        return None

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
