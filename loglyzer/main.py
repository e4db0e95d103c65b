"""
CLI Interface for loglyzer.

Reads a log file, filters its entries and prints level, top error and
per-hour error statistics as text, JSON or CSV.
"""

import logging
import time
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from .errors import LogFileNotFoundError, LogReadError
from .graph import run_pipeline
from .models.log_entry import TIMESTAMP_FORMAT
from .nodes.filters import FilterOptions
from .nodes.ingestion import get_source_size, should_show_progress, should_use_parallel
from .renderers import render_csv, render_json, render_text
from .utils.config import Config, get_config


NO_MATCHES_MESSAGE = "No entries match the given filters."


class OutputFormat(str, Enum):
    """Report formats."""
    TEXT = "text"
    JSON = "json"
    CSV = "csv"


# Initialize CLI app
app = typer.Typer(
    name="loglyzer",
    help="Analyze and filter log files",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    logging.getLogger("loglyzer").setLevel(level)


def check_config() -> Config:
    """Load configuration and report any invalid values."""
    config = get_config()
    for problem in config.validate():
        logger.warning("Invalid configuration: %s", problem)
    return config


def make_progress() -> Progress:
    """Byte-driven progress bar on stderr, cleared when done."""
    return Progress(
        TimeElapsedColumn(),
        BarColumn(bar_width=40),
        DownloadColumn(),
        TimeRemainingColumn(),
        console=err_console,
        transient=True,
    )


def fail(message: str, code: int) -> NoReturn:
    """Print an error message on stderr and exit with code."""
    err_console.print(message, style="red", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=code)


def write_result(text: str, output: Optional[Path]) -> None:
    """Write text to the output file, or to stdout when none is given."""
    if output is None:
        typer.echo(text)
        return
    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        fail(f"Cannot write file {output}: {e.strerror or e}", code=1)
    console.print(f"Results written to {output}", markup=False, highlight=False)


@app.command()
def analyze(
    log_file: Path = typer.Argument(
        ...,
        metavar="LOG_FILE",
        help="Log file to analyze"
    ),
    errors_only: bool = typer.Option(
        False,
        "--errors-only",
        help="Keep only ERROR entries"
    ),
    search: Optional[str] = typer.Option(
        None,
        "--search",
        metavar="TEXT",
        help="Case-insensitive text to look for in each entry"
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        min=1,
        metavar="N",
        help="Number of most frequent errors to show (at least 1)"
    ),
    since: Optional[datetime] = typer.Option(
        None,
        "--since",
        formats=[TIMESTAMP_FORMAT],
        metavar="DATETIME",
        help="Keep entries from this date/time on (YYYY-MM-DD HH:MM:SS)"
    ),
    until: Optional[datetime] = typer.Option(
        None,
        "--until",
        formats=[TIMESTAMP_FORMAT],
        metavar="DATETIME",
        help="Keep entries up to this date/time (YYYY-MM-DD HH:MM:SS)"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        case_sensitive=False,
        help="Output format"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        metavar="FILE",
        help="Write the result to a file instead of stdout"
    ),
    parallel: bool = typer.Option(
        False,
        "--parallel",
        help="Force parallel parsing whatever the file size"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show reading mode and timing information"
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output"
    ),
):
    """
    Analyze a log file and report level, error and hourly statistics.

    Lines must look like:  2024-01-15 10:30:45 [ERROR] Failed to connect

    Example:
        loglyzer app.log --errors-only --search database --top 3
        loglyzer app.log --since "2024-01-15 10:00:00" --format json
    """
    config = get_config()
    configure_logging("DEBUG" if verbose else config.log_level)
    check_config()

    top_n = top if top is not None else max(config.default_top, 1)
    started = time.perf_counter()

    try:
        size = get_source_size(log_file)
    except LogFileNotFoundError:
        fail(f"File not found: {log_file}", code=2)
    except LogReadError as e:
        fail(str(e), code=1)

    if verbose:
        mode = "parallel" if should_use_parallel(parallel, size, config.parallel_threshold) else "sequential"
        err_console.print(
            f"Reading {log_file} ({size} bytes) in {mode} mode",
            markup=False, highlight=False, soft_wrap=True
        )

    filters = FilterOptions(
        errors_only=errors_only,
        search=search,
        since=since,
        until=until,
    )

    show_progress = (
        should_show_progress(size, config.progress_threshold)
        and err_console.is_terminal
    )

    try:
        if show_progress:
            with make_progress() as progress:
                task = progress.add_task("Reading", total=size)
                state = run_pipeline(
                    log_file,
                    filters=filters,
                    top_n=top_n,
                    force_parallel=parallel,
                    on_progress=lambda consumed: progress.advance(task, consumed),
                    config=config,
                )
        else:
            state = run_pipeline(
                log_file,
                filters=filters,
                top_n=top_n,
                force_parallel=parallel,
                config=config,
            )
    except LogFileNotFoundError:
        fail(f"File not found: {log_file}", code=2)
    except LogReadError as e:
        fail(str(e), code=1)

    if state.get("no_matches", True):
        write_result(NO_MATCHES_MESSAGE, output)
        return

    stats = state["stats"]
    if output_format is OutputFormat.JSON:
        rendered = render_json(stats)
    elif output_format is OutputFormat.CSV:
        rendered = render_csv(stats)
    else:
        color = not no_color and output is None and console.is_terminal
        rendered = render_text(stats, top_n, color=color)

    write_result(rendered, output)

    if verbose:
        total_time = time.perf_counter() - started
        parse_time = state["ingestion"].elapsed
        err_console.print(
            f"\nPerformance: parse={parse_time:.3f}s, "
            f"analysis={total_time - parse_time:.3f}s, total={total_time:.3f}s",
            markup=False, highlight=False
        )


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
