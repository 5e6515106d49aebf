"""
Main CLI entry point for es-backend-listener using Click.

Usage:
    es-backend-listener build SAMPLE_FILE [-P KEY=VALUE]... [--mode MODE] [--build-number N]
    es-backend-listener format-time MILLIS [--timestamp PATTERN] [--timezone ZONE]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import click
from dateutil import tz as dateutil_tz
from pydantic import ValidationError

from backendlistener import __version__
from backendlistener.builders import build_metric
from backendlistener.config import DEFAULT_TIMESTAMP, ListenerSettings
from backendlistener.context import ParameterContext, TestRunContext
from backendlistener.host import HostResolutionError
from backendlistener.models import SampleResult
from backendlistener.serializers import document_to_json
from backendlistener.timeformat import DateFormat, InvalidPatternError


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="es-backend-listener")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Convert load-test samples into datastore documents."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("sample_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--param",
    "-P",
    "params",
    multiple=True,
    help="Listener parameter as KEY=VALUE (can be specified multiple times)",
)
@click.option("--mode", help="Reporting mode: debug, error or info (overrides es.test.mode)")
@click.option("--timestamp", help="Timestamp pattern (overrides es.timestamp)")
@click.option("--timezone", "timezone_name", help="Time zone name (overrides es.timezone)")
@click.option("--build-number", type=int, help="CI build number (overrides BUILD_NUMBER)")
@click.option("--test-start", type=int, help="Test start as epoch millis (default: now)")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation, 0 for compact")
@pass_config
def build(
    config: Config,
    sample_file: str,
    params: tuple[str, ...],
    mode: Optional[str],
    timestamp: Optional[str],
    timezone_name: Optional[str],
    build_number: Optional[int],
    test_start: Optional[int],
    indent: int,
) -> None:
    """Build documents for the samples in a JSON file.

    SAMPLE_FILE holds one sample (a JSON object) or several (a JSON array).
    Parameters whose names do not contain 'es.' are copied into every
    document as custom fields.

    Example:
        es-backend-listener build sample.json -P es.test.mode=debug -P env=staging
    """
    logger = logging.getLogger("build")

    try:
        context = ParameterContext.from_pairs(list(params))
    except ValueError as e:
        raise click.ClickException(str(e))

    overrides = {
        "test_mode": mode,
        "timestamp": timestamp,
        "timezone": timezone_name,
        "build_number": build_number,
    }
    try:
        settings = ListenerSettings.from_parameters(context)
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if overrides:
            settings = ListenerSettings(**{**settings.model_dump(), **overrides})
    except ValidationError as e:
        raise click.ClickException(f"Invalid settings: {e}")

    samples, many = _load_samples(Path(sample_file))
    logger.info(f"Loaded {len(samples)} sample(s) from {sample_file}")

    if test_start is not None:
        run_context = TestRunContext(start_time=test_start)
    else:
        run_context = TestRunContext.start()

    documents = []
    for sample in samples:
        try:
            documents.append(build_metric(sample, context, run_context, settings))
        except (HostResolutionError, ValueError, OverflowError) as e:
            raise click.ClickException(f"Error building document: {e}")

    output = documents if many else documents[0]
    click.echo(document_to_json(output, indent=indent or None))


@cli.command("format-time")
@click.argument("millis", type=int)
@click.option(
    "--timestamp",
    default=DEFAULT_TIMESTAMP,
    show_default=True,
    help="Timestamp pattern",
)
@click.option("--timezone", "timezone_name", help="Time zone name (default: local)")
@pass_config
def format_time(
    config: Config,
    millis: int,
    timestamp: str,
    timezone_name: Optional[str],
) -> None:
    """Format an epoch-millis value with a timestamp pattern.

    Useful for checking an es.timestamp pattern before a test run.

    Example:
        es-backend-listener format-time 1705314645000 --timestamp "yyyy-MM-dd HH:mm:ss" --timezone UTC
    """
    zone = None
    if timezone_name:
        zone = dateutil_tz.gettz(timezone_name)
        if zone is None:
            raise click.ClickException(f"Unknown time zone: {timezone_name}")

    try:
        date_format = DateFormat(timestamp)
    except InvalidPatternError as e:
        raise click.ClickException(f"Invalid pattern: {e}")

    click.echo(date_format.format_millis(millis, zone))


def _load_samples(path: Path) -> tuple[list[SampleResult], bool]:
    """Read samples from a JSON file; the flag tells whether it held an array."""
    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Error parsing sample file: {e}")

    many = isinstance(raw, list)
    items = raw if many else [raw]
    if not items:
        raise click.ClickException(f"No samples in {path}")

    try:
        samples = [SampleResult.model_validate(item) for item in items]
    except ValidationError as e:
        raise click.ClickException(f"Invalid sample: {e}")

    return samples, many


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
