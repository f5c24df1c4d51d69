"""CLI commands for QueryGen."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

import click
from rich.markup import escape

from querygen import __version__
from querygen.cli.output import CLIOutput
from querygen.combinatorial.engine import QueryGenerator
from querygen.config import QueryGenSettings, load_settings, load_suite
from querygen.core.builder import QueryBuilder
from querygen.core.models import QuerySpec
from querygen.errors import QueryGenError
from querygen.observability.logging import configure_logging, log_context
from querygen.reporters import BaseReporter, create_reporter

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["text", "json"]


def _fail(error: QueryGenError) -> NoReturn:
    click.echo(error.format_verbose(), err=True)
    sys.exit(1)


def _select(specs: list[QuerySpec], names: Sequence[str]) -> list[QuerySpec]:
    """Keep only the queries named on the command line, in suite order."""
    if not names:
        return specs
    known = {spec.name for spec in specs}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise click.UsageError(
            f"Unknown query: {', '.join(unknown)}. Available: {', '.join(sorted(known))}"
        )
    wanted = set(names)
    return [spec for spec in specs if spec.name in wanted]


def _parse_assignments(values: Sequence[str], option: str) -> list[tuple[str, list[str]]]:
    """Parse ``NAME=V1,V2`` option values."""
    parsed: list[tuple[str, list[str]]] = []
    for raw in values:
        name, sep, joined = raw.partition("=")
        if not sep:
            raise click.BadParameter(f"expected NAME=V1,V2 but got {raw!r}", param_hint=option)
        items = [item for item in joined.split(",") if item != ""]
        parsed.append((name, items))
    return parsed


def run_generation(
    specs: Sequence[QuerySpec],
    reporter: BaseReporter,
    settings: QueryGenSettings,
    source: str | None = None,
) -> str | None:
    """Emit every spec's URLs into a reporter, then finish it."""
    generator = QueryGenerator(warn_threshold=settings.warn_threshold)
    # All specs are checked before the first URL is emitted.
    for spec in specs:
        generator.validate(spec)

    try:
        for spec in specs:
            with log_context(source=source, query=spec.name):
                reporter.start_query(spec)
                generator.generate(spec, emit=reporter.emit)

        logger.info(f"Emitted {reporter.emitted} URLs for {len(specs)} queries")
        return reporter.finish()
    finally:
        reporter.close()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a settings YAML file",
)
@click.option(
    "--log-format",
    type=click.Choice(["human", "json"]),
    default=None,
    help="Log output format (logs go to stderr)",
)
@click.version_option(__version__, prog_name="querygen")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None, log_format: str | None) -> None:
    """QueryGen - generate every filter combination of an API query."""
    ctx.ensure_object(dict)

    try:
        settings = load_settings(config)
    except QueryGenError as e:
        _fail(e)

    if verbose:
        settings.verbose = True
    if log_format:
        settings.log_format = log_format

    configure_logging(
        level=settings.effective_log_level,
        json_format=settings.log_format == "json",
    )
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("suite", type=click.Path(exists=True, dir_okay=False))
@click.option("--query", "-q", "query_names", multiple=True, help="Only generate this query (repeatable)")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default from settings)",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to a file instead of stdout")
@click.option("--headers", is_flag=True, help="Print '# <query name>' before each query's URLs")
@click.pass_context
def generate(
    ctx: click.Context,
    suite: str,
    query_names: tuple[str, ...],
    output_format: str | None,
    output: str | None,
    headers: bool,
) -> None:
    """Generate all URLs of the queries in SUITE."""
    settings: QueryGenSettings = ctx.obj["settings"]

    try:
        specs = _select(load_suite(suite, settings), query_names)
        reporter = create_reporter(output_format or settings.output_format, output, headers)
        rendered = run_generation(specs, reporter, settings, source=suite)
    except QueryGenError as e:
        _fail(e)

    if rendered is not None and output is None:
        click.echo(rendered)
    elif output is not None:
        click.echo(f"Wrote {reporter.emitted} URLs to {Path(output)}", err=True)


@cli.command()
@click.argument("suite", type=click.Path(exists=True, dir_okay=False))
@click.option("--query", "-q", "query_names", multiple=True, help="Only count this query (repeatable)")
@click.pass_context
def count(ctx: click.Context, suite: str, query_names: tuple[str, ...]) -> None:
    """Show how many URLs each query in SUITE expands to."""
    settings: QueryGenSettings = ctx.obj["settings"]
    generator = QueryGenerator(warn_threshold=settings.warn_threshold)

    try:
        specs = _select(load_suite(suite, settings), query_names)
        counts = [generator.count(spec) for spec in specs]
    except QueryGenError as e:
        _fail(e)

    output = CLIOutput()
    output.count_table(specs, counts)
    for query_count in counts:
        if generator.exceeds_threshold(query_count):
            output.warning(
                f"{escape(query_count.name)} expands to {query_count.raw} combinations "
                f"(threshold {generator.warn_threshold})"
            )


@cli.command()
@click.argument("suite", type=click.Path(exists=True, dir_okay=False))
@click.option("--show", is_flag=True, help="Print each query's parameters")
@click.pass_context
def validate(ctx: click.Context, suite: str, show: bool) -> None:
    """Check that SUITE loads and every query can be generated."""
    settings: QueryGenSettings = ctx.obj["settings"]
    output = CLIOutput()

    try:
        specs = load_suite(suite, settings)
    except QueryGenError as e:
        output.error(f"{suite} is invalid")
        _fail(e)

    if show:
        for spec in specs:
            output.query_tree(spec)
    output.success(f"{suite}: {len(specs)} queries valid")


@cli.command()
@click.argument("name")
@click.option("--host", default=None, help="Host, e.g. http://localhost:8080 (default from settings)")
@click.option("--url", "url_path", required=True, help="URL path, e.g. /products/by-filters")
@click.option("--fix", "fixed", multiple=True, metavar="NAME=V1,V2", help="Fixed parameter (repeatable)")
@click.option("--mix", "mixed", multiple=True, metavar="NAME=V1,V2", help="Mixed parameter (repeatable)")
@click.option("--always-filter", is_flag=True, help="Skip the URL without any parameter")
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None)
@click.pass_context
def inline(
    ctx: click.Context,
    name: str,
    host: str | None,
    url_path: str,
    fixed: tuple[str, ...],
    mixed: tuple[str, ...],
    always_filter: bool,
    output_format: str | None,
) -> None:
    """Generate the URLs of one query declared on the command line."""
    settings: QueryGenSettings = ctx.obj["settings"]
    fixed_params = _parse_assignments(fixed, "--fix")
    mixed_params = _parse_assignments(mixed, "--mix")

    try:
        builder = QueryBuilder().query(name)
        if host or settings.default_host:
            builder.host(host or settings.default_host)
        builder.url(url_path)
        if always_filter:
            builder.always_filter()
        for param_name, values in fixed_params:
            builder.fix_param(param_name, values)
        for param_name, values in mixed_params:
            builder.mix_param(param_name, values)

        reporter = create_reporter(output_format or settings.output_format)
        rendered = run_generation([builder.build()], reporter, settings)
    except QueryGenError as e:
        _fail(e)

    if rendered is not None:
        click.echo(rendered)
