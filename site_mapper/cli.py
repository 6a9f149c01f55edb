# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of SiteMapper.

Usage:
  site-mapper BASE_URL OUTPUT [options]

Crawls every page reachable from BASE_URL and writes the link graph to
OUTPUT as a Graphviz DOT file.

Options:
  --config, -c PATH     YAML/JSON config file (CLI options win over it)
  --idle-timeout SEC    Seconds without a new edge before the crawl stops
  --workers N           Number of concurrent fetch workers
  --completion MODE     idle (timeout only) or tracked (stop when no work is pending)
  --extractor NAME      regex or soup
  --json PATH           Also save the edge list as JSON
  --log-level LEVEL     Logging level (DEBUG, INFO, ...)
  --log-file PATH       Log file (stderr only if omitted)
  --log-format FORMAT   Logging format string
  --version, -v         Show the SiteMapper version

Example:
  site-mapper https://example.com sitemap.dot --workers 10 --idle-timeout 3
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import map_site
from site_mapper.logger import DEFAULT_FORMAT, init_logging
from site_mapper.report.dot_report import write_dot
from site_mapper.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

PROGRESS_LINE = 50


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def print_progress(pages: int) -> None:
    """One dot per newly discovered page, the running total every PROGRESS_LINE pages."""
    click.echo('.', nl=False)
    if pages % PROGRESS_LINE == 0:
        click.echo(f' {pages}')


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.argument('base_url')
@click.argument('output', type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option('--idle-timeout', 'idle_timeout', type=float, default=None,
              help='Seconds without a new edge before the crawl stops (default 5).')
@click.option('--workers', 'workers', type=int, default=None,
              help='Number of concurrent fetch workers (default 20).')
@click.option('--completion', 'completion', type=click.Choice(['idle', 'tracked']), default=None,
              help='How the end of the crawl is detected.')
@click.option('--extractor', 'extractor', type=click.Choice(['regex', 'soup']), default=None,
              help='Link extraction strategy.')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Also save the edge list as JSON'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Log file path (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
def cli(base_url, output, config_path, idle_timeout, workers, completion, extractor,
        json_output, log_level, log_file, log_format):
    """Map the link graph of the site at BASE_URL into the DOT file OUTPUT."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(
            config_path,
            base_url=base_url,
            idle_timeout=idle_timeout,
            workers=workers,
            completion=completion,
            extractor=extractor,
        )
    except (ValidationError, OSError, ValueError, TypeError) as e:
        print_error(f'Configuration error: {e}')

    click.echo(f'Mapping {cfg.base_url}')
    edges = asyncio.run(map_site(cfg, progress=print_progress))

    click.echo()
    click.echo()
    click.echo(f'Number of edges found: {len(edges)}')

    try:
        saved = write_dot(edges, output)
    except OSError as e:
        print_error(f'Cannot write {output}: {e}')
    click.echo(f'Wrote {len(edges)} edges to {saved}')

    if json_output:
        try:
            saved_json = render_json(edges, json_output)
        except OSError as e:
            print_error(f'Cannot write JSON report: {e}')
        click.echo(f'JSON report: {saved_json}')


if __name__ == "__main__":
    cli()
