"""QueryGen CLI - Command line interface for QueryGen."""

from querygen.cli.commands import cli
from querygen.cli.output import CLIOutput


def main() -> None:
    """Main entry point for the querygen CLI."""
    cli()


__all__ = ["main", "cli", "CLIOutput"]
