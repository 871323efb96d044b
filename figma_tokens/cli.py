"""Click-based CLI for the Figma token pipeline."""

import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .config import TokensConfig, load_config, require_fetch_credentials
from .fetch import FigmaClient, summarize_raw_graph
from .graph import load_graph, load_raw_graph
from .output import OutputConfig, OutputManager
from .pipeline import TokenPipeline
from .storage import save_raw_graph
from .tokens_logging import setup_logging


def common_options(f: Any) -> Any:
    """Options shared by every command."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option("--no-color", is_flag=True, help="Disable colored output")(f)
    f = click.option(
        "--log-format",
        type=click.Choice(["text", "json"]),
        default=None,
        help="Log file format",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Also write logs to this file",
    )(f)
    f = click.option(
        "--env-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Settings file (default: ./.env)",
    )(f)
    return f


def _output(verbose: bool, quiet: bool, no_color: bool) -> OutputManager:
    return OutputManager(OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color))


def _prepare(
    verbose: bool,
    quiet: bool,
    log_format: str | None,
    log_file: Path | None,
    env_file: Path | None,
    **overrides: Any,
) -> TokensConfig:
    config = load_config(env_file, log_format=log_format, log_file=log_file, **overrides)
    setup_logging(
        level=config.log_level,
        quiet=quiet,
        verbose=verbose,
        log_file=config.log_file,
        log_format=config.log_format,
    )
    return config


def _fail(out: OutputManager, error: Exception) -> None:
    sys.exit(out.error(error))


@click.group()
@click.version_option(version=__version__, prog_name="figma-tokens")
def cli() -> None:
    """Figma variables to design token files."""


@cli.command()
@common_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to save the raw graph (default: tokens/figma-variables-raw.json)",
)
def fetch(verbose, quiet, no_color, log_format, log_file, env_file, output) -> None:
    """Fetch the raw variable graph from the Figma API."""
    out = _output(verbose, quiet, no_color)
    try:
        config = _prepare(verbose, quiet, log_format, log_file, env_file, raw_path=output)
        require_fetch_credentials(config)

        with FigmaClient(
            config.figma_access_token,
            base_url=config.figma_base_url,
            timeout=config.request_timeout,
        ) as client:
            data = client.fetch_local_variables(config.figma_file_key)

        path = save_raw_graph(data, config.raw_path, config.figma_file_key)
        out.success(f"Raw data saved to: {path}")
        out.raw_summary(summarize_raw_graph(data))
    except Exception as e:
        _fail(out, e)


@cli.command()
@common_options
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Raw graph JSON (default: tokens/figma-variables-raw.json)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for token files (default: tokens)",
)
@click.option("--dry-run", is_flag=True, help="Resolve tokens without writing files")
def process(
    verbose, quiet, no_color, log_format, log_file, env_file, input_path, output_dir, dry_run
) -> None:
    """Resolve and expand the raw graph into per-collection token files."""
    out = _output(verbose, quiet, no_color)
    try:
        config = _prepare(
            verbose,
            quiet,
            log_format,
            log_file,
            env_file,
            raw_path=input_path,
            output_dir=output_dir,
        )
        result = TokenPipeline(config).run(dry_run=dry_run)

        for name, count in result.token_counts.items():
            out.collection_written(name, count, result.written_files.get(name))

        out.summary(
            total=sum(result.token_counts.values()),
            skipped=result.stats.skipped,
            unresolved=result.stats.unresolved_values,
            duration_ms=result.execution_time_ms,
        )
    except Exception as e:
        _fail(out, e)


@cli.command()
@common_options
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Raw graph JSON (default: tokens/figma-variables-raw.json)",
)
def inspect(verbose, quiet, no_color, log_format, log_file, env_file, input_path) -> None:
    """Show collections, their modes and the resolved mode dimensions."""
    out = _output(verbose, quiet, no_color)
    try:
        config = _prepare(verbose, quiet, log_format, log_file, env_file, raw_path=input_path)
        graph = load_graph(load_raw_graph(config.raw_path), str(config.raw_path))

        out.header("Collections")
        for collection in graph.collections.values():
            modes = ", ".join(mode.name for mode in collection.modes) or "none"
            policy = graph.policy_for(collection).value
            out.plain(f"  {collection.name} ({policy}): [{modes}]")

        out.mode_catalogs(graph.mode_catalogs)
    except Exception as e:
        _fail(out, e)


if __name__ == "__main__":
    cli()
