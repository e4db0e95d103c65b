"""
Human-readable text report.

Built from rich tables and captured as a string so it can go to the
terminal or to a file alike. Sections whose data is empty are left out.
"""

import io

from rich.cells import cell_len
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models.stats import LogStats


# Highlighting of level names when color is enabled
LEVEL_STYLES = {
    "ERROR": "bold red",
    "WARNING": "bold yellow",
}

REPORT_WIDTH = 120

# Room left for the Occurrences column, borders and padding
TABLE_MARGIN = 40


def _level_cell(level: str) -> Text:
    return Text(level, style=LEVEL_STYLES.get(level, ""))


def _level_table(stats: LogStats) -> Table:
    table = Table()
    table.add_column("Level")
    table.add_column("Count", justify="right")
    table.add_column("Percentage", justify="right")

    for level, count in sorted(stats.by_level.items()):
        table.add_row(
            _level_cell(level),
            str(count),
            f"{stats.level_percentage(level):.1f}%"
        )
    return table


def _top_errors_table(stats: LogStats) -> Table:
    table = Table()
    table.add_column("Error Message", overflow="fold")
    table.add_column("Occurrences", justify="right")

    for error in stats.top_errors:
        # Text() keeps brackets in messages from being read as markup
        table.add_row(Text(error.message), str(error.count))
    return table


def _hourly_table(values: dict, value_header: str, fmt: str) -> Table:
    table = Table()
    table.add_column("Hour")
    table.add_column(value_header, justify="right")

    for hour, value in sorted(values.items()):
        table.add_row(hour, fmt.format(value))
    return table


def _report_width(stats: LogStats) -> int:
    """Console width at which no top error message gets cropped."""
    longest = max((cell_len(error.message) for error in stats.top_errors), default=0)
    return max(REPORT_WIDTH, longest + TABLE_MARGIN)


def render_text(stats: LogStats, top_n: int, color: bool = False) -> str:
    """
    Render the statistics as a multi-section text report.

    Args:
        stats: Aggregated statistics
        top_n: Requested number of top errors, shown in the section title
        color: Emit ANSI styles (level highlighting, bold titles)

    Returns:
        The report as a string
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=_report_width(stats),
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
    )

    console.print()
    console.print("[bold]Log Analysis Results[/bold]")
    console.print("=" * 24)
    console.print()
    console.print(f"Total entries: {stats.total_entries}")
    console.print()

    if stats.skipped_lines > 0:
        console.print(f"Skipped lines (invalid format): {stats.skipped_lines}")
        console.print()

    if stats.since or stats.until:
        console.print("Filters applied:")
        if stats.since:
            console.print(f"- Since: {stats.since}")
        if stats.until:
            console.print(f"- Until: {stats.until}")
        console.print()

    console.print("Breakdown by level:")
    console.print(_level_table(stats))

    if stats.top_errors:
        console.print()
        console.print(f"Top errors (max {top_n}):")
        console.print(_top_errors_table(stats))

    if stats.errors_by_hour:
        console.print()
        console.print("Errors by hour:")
        console.print(_hourly_table(stats.errors_by_hour, "Count", "{}"))

    if stats.error_rate_by_hour:
        console.print()
        console.print("Error rate by hour:")
        console.print(_hourly_table(stats.error_rate_by_hour, "Error %", "{:.2f}%"))

    return buffer.getvalue()
