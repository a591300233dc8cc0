"""
filterpipe Typer CLI Application

Command line entry point: parses paths and filter options, validates
them, runs the pipeline and maps failures to exit codes. Filtered paths
go to stdout; everything else goes to stderr.
"""

from __future__ import annotations

from typing import List

import typer
from rich.console import Console

from filterpipe.cli.common.context import (
    CliContext,
    LogLevel,
    get_cli_context,
    set_cli_context,
)
from filterpipe.cli.common.error_handler import handle_cli_error
from filterpipe.config import build_filter_settings
from filterpipe.core.pipeline import PipelineResult, run_pipeline
from filterpipe.core.pipeline.domain import build_statistics_table
from filterpipe.shared.constants import (
    CLIDefaults,
    CLIHelp,
    CLIOptions,
    Pipeline,
    SizeBound,
)
from filterpipe.shared.logging import setup_structured_logger

__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
)


@app.command(no_args_is_help=True)
def filter_command(  # pylint: disable=too-many-arguments
    paths: List[str] = typer.Argument(
        ...,
        help=CLIHelp.PATHS_HELP,
        show_default=False,
    ),
    min_size: int = typer.Option(
        SizeBound.UNSET,
        CLIOptions.MIN_SIZE,
        help=CLIHelp.MIN_SIZE_HELP,
    ),
    max_size: int = typer.Option(
        SizeBound.UNSET,
        CLIOptions.MAX_SIZE,
        help=CLIHelp.MAX_SIZE_HELP,
    ),
    suffixes: str = typer.Option(
        "",
        CLIOptions.SUFFIXES,
        help=CLIHelp.SUFFIXES_HELP,
    ),
    queue_size: int = typer.Option(
        Pipeline.QUEUE_SIZE,
        CLIOptions.QUEUE_SIZE,
        help=CLIHelp.QUEUE_SIZE_HELP,
    ),
    stats: bool = typer.Option(
        False,
        CLIOptions.STATS,
        help=CLIHelp.STATS_HELP,
    ),
    verbose: int = typer.Option(
        0,
        CLIOptions.VERBOSE,
        CLIOptions.VERBOSE_SHORT,
        count=True,
        help=CLIHelp.VERBOSE_HELP,
    ),
    log_level: LogLevel = typer.Option(
        LogLevel(CLIDefaults.LOG_LEVEL),
        CLIOptions.LOG_LEVEL,
        case_sensitive=False,
        help=CLIHelp.LOG_LEVEL_HELP,
    ),
    log_json: bool = typer.Option(
        False,
        CLIOptions.LOG_JSON,
        help=CLIHelp.LOG_JSON_HELP,
    ),
    version: bool = typer.Option(
        False,
        CLIOptions.VERSION,
        CLIOptions.VERSION_SHORT,
        callback=version_callback,
        is_eager=True,
        help=CLIHelp.VERSION_HELP,
    ),
) -> None:
    """
    Filter file paths by suffix and size.

    Each path passes through a suffix filter and then a size filter; the
    paths that survive are printed one per line in the order given.
    Size bounds are exclusive. Files whose size cannot be read are
    skipped silently.

    Examples:
        # PDFs and text files smaller than 2000 bytes
        filterpipe --max 2000 --suffixes .pdf,.txt ~/Documents/*

        # Anything strictly larger than 1 MiB
        filterpipe --min 1048576 *
    """
    set_cli_context(
        CliContext(
            verbose=verbose,
            log_level=log_level,
            log_json=log_json,
            show_stats=stats,
        )
    )
    _configure_logging()

    try:
        settings = build_filter_settings(
            min_size=min_size,
            max_size=max_size,
            suffixes=suffixes,
            queue_size=queue_size,
        )
        result = run_pipeline(paths, settings)
    except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, CLIDefaults.COMMAND)
        raise typer.Exit(exit_code) from e

    _print_statistics(result)


def _configure_logging() -> None:
    context = get_cli_context()
    setup_structured_logger(
        level=context.get_effective_log_level(),
        use_rich_console=not context.log_json,
    )


def _print_statistics(result: PipelineResult) -> None:
    """Print the per-stage table to stderr when ``--stats`` was given."""
    if not get_cli_context().show_stats:
        return
    Console(stderr=True).print(
        build_statistics_table(result.statistics, result.duration_seconds),
    )


def run() -> None:
    """Console script entry point."""
    app()
