"""Command line interface for harness metadata.

Example:
    $ harnessmeta check --results results.yaml --document test.html --show-source
    $ harnessmeta render --results results.json --output metadata.html
"""

import sys
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.traceback import install as install_rich_traceback

from .config import get_config
from .errors import CacheParseError, ConfigurationError, MetadataError, ResultsLoadError
from .formatters import RichDocumentSurface
from .generator import MetadataGenerator
from .harness import load_cached_metadata, load_results
from .logger import configure_logging, get_logger
from .models import MetadataIssue
from .types import ISSUE_ID, ExitCode, MessageClass

install_rich_traceback(show_locals=False)

logger = get_logger("cli")
console = Console()

def _exit_code(issues: List[MetadataIssue]) -> ExitCode:
    """Map the most severe reported issue to an exit code."""
    severities = {issue.severity for issue in issues}
    if MessageClass.ERROR in severities:
        return ExitCode.ERROR
    if MessageClass.WARNING in severities:
        return ExitCode.WARNING
    return ExitCode.SUCCESS

@click.group()
@click.option('--env-file', type=click.Path(dir_okay=False), help='Environment file to load settings from')
@click.option('--log-level', type=str, help='Console log level (DEBUG, INFO, WARNING, ERROR)')
def cli(env_file: Optional[str], log_level: Optional[str]) -> None:
    """Check and regenerate cached test metadata."""
    config = get_config()
    if env_file:
        config.set_env_file(env_file)
    if log_level:
        config.set('log_level', log_level)
    try:
        configure_logging()
    except ConfigurationError as e:
        logger.error(e.message)
        sys.exit(ExitCode.LOAD_ERROR.value)

@cli.command()
@click.option('--results', '-r', type=click.Path(exists=True, dir_okay=False), required=True,
              help='Completed test results (YAML or JSON)')
@click.option('--document', '-d', type=click.Path(exists=True, dir_okay=False),
              help='Test document holding the cached metadata block')
@click.option('--sidecar', '-s', type=click.Path(exists=True, dir_okay=False),
              help='Metadata sidecar file, used instead of the document')
@click.option('--show-source', is_flag=True, help='Print the generated source when the cache needs updating')
def check(results: str, document: Optional[str], sidecar: Optional[str], show_source: bool) -> None:
    """Validate cached metadata against a completed run."""
    try:
        records, harness_status = load_results(Path(results))
        cached_metadata = load_cached_metadata(document, sidecar)
    except (ResultsLoadError, CacheParseError) as e:
        logger.error(e.message)
        sys.exit(ExitCode.LOAD_ERROR.value)

    surface = RichDocumentSurface(console)
    generator = MetadataGenerator(surface)
    issues = generator.process(records, harness_status, cached_metadata)

    if show_source and surface.get_element_by_id(ISSUE_ID) is not None:
        try:
            surface.activate(ISSUE_ID)
        except MetadataError as e:
            logger.error(e.message)
            sys.exit(ExitCode.LOAD_ERROR.value)

    if not issues:
        console.print("[green]Cached metadata is in sync.[/green]")
    sys.exit(_exit_code(issues).value)

@cli.command()
@click.option('--results', '-r', type=click.Path(exists=True, dir_okay=False), required=True,
              help='Completed test results (YAML or JSON)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the source to this file')
def render(results: str, output: Optional[str]) -> None:
    """Print source code caching the metadata of a completed run."""
    try:
        records, harness_status = load_results(Path(results))
    except ResultsLoadError as e:
        logger.error(e.message)
        sys.exit(ExitCode.LOAD_ERROR.value)

    logger.debug(f"Rendering metadata, harness status: {harness_status!r}")
    generator = MetadataGenerator()
    generator.collect(records)
    issues = generator.issues
    source = generator.generate_source()

    if output:
        Path(output).write_text(source, encoding='utf-8')
        logger.info(f"Metadata source written to {output}")
    else:
        click.echo(source, nl=False)

    if any(issue.severity == MessageClass.ERROR for issue in issues):
        sys.exit(ExitCode.ERROR.value)

if __name__ == '__main__':
    cli()
