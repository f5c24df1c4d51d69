"""Rich CLI output for QueryGen.

Tables and status lines printed by ``count`` and ``validate``. Generated
URLs themselves never go through Rich; they are written by reporters so
they stay plain and pipeable.

Example:
    >>> from querygen.cli.output import CLIOutput
    >>> output = CLIOutput()
    >>> output.count_table(specs, counts)
    >>> output.success("3 queries valid")
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from querygen.combinatorial.engine import QueryCount
    from querygen.core.models import QuerySpec


class CLIOutput:
    """Status lines and tables for the QueryGen CLI.

    Attributes:
        console: Rich console everything is printed to.
    """

    SYMBOLS = {
        "check": "✓",
        "cross": "✗",
        "warning": "⚠",
    }

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def _symbol(self, name: str) -> str:
        return self.SYMBOLS.get(name, "")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{self._symbol('warning')}[/yellow] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{self._symbol('cross')}[/red] {message}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{self._symbol('check')}[/green] {message}")

    def count_table(self, specs: Sequence[QuerySpec], counts: Sequence[QueryCount]) -> Table:
        """Print one row per query with its combination and URL counts."""
        table = Table(
            show_header=True,
            header_style="bold",
            show_footer=len(specs) > 1,
            padding=(0, 1),
        )
        table.add_column("Query", footer="Total", no_wrap=True, overflow="fold")
        table.add_column("Endpoint", overflow="fold")
        table.add_column("Fixed", justify="right")
        table.add_column("Mixed", justify="right")
        table.add_column("Combinations", justify="right", footer=str(sum(c.raw for c in counts)))
        table.add_column("URLs", justify="right", style="cyan", footer=str(sum(c.admissible for c in counts)))

        for spec, count in zip(specs, counts):
            table.add_row(
                Text(spec.name, style="bold"),
                spec.base_url,
                str(len(spec.fixed)),
                str(len(spec.mixed)),
                str(count.raw),
                str(count.admissible),
            )

        self.console.print(table)
        return table

    def query_tree(self, spec: QuerySpec) -> None:
        """Print a query's parameters, one per line."""
        flag = " [dim](always filter)[/dim]" if spec.require_non_empty else ""
        self.console.print(f"[bold]{escape(spec.name)}[/bold] {escape(spec.base_url)}{flag}")
        for name, param in spec.fixed.items():
            self.console.print(f"  fix {escape(name)} = {escape(', '.join(param.values))}")
        for name, param in spec.mixed.items():
            self.console.print(f"  mix {escape(name)} = {escape(', '.join(param.values))}")
