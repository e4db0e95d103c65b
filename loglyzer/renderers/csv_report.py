"""
CSV report.

A single metric,key,value table; each statistic family becomes a set of
rows tagged with its metric name.
"""

import csv
import io

from ..models.stats import LogStats


CSV_HEADER = ("metric", "key", "value")


def render_csv(stats: LogStats) -> str:
    """
    Render the statistics as CSV.

    Rows, in order: total, skipped (only when lines were skipped),
    filter bounds, levels, top errors, errors by hour and error rate by
    hour. Rates carry four decimals, everything else is an integer.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    writer.writerow(("total", "", stats.total_entries))
    if stats.skipped_lines > 0:
        writer.writerow(("skipped", "", stats.skipped_lines))

    if stats.since:
        writer.writerow(("filter", "since", stats.since))
    if stats.until:
        writer.writerow(("filter", "until", stats.until))

    for level, count in sorted(stats.by_level.items()):
        writer.writerow(("level", level, count))

    for error in stats.top_errors:
        writer.writerow(("top_error", error.message, error.count))

    for hour, count in sorted(stats.errors_by_hour.items()):
        writer.writerow(("error_by_hour", hour, count))

    for hour, rate in sorted(stats.error_rate_by_hour.items()):
        writer.writerow(("error_rate_by_hour", hour, f"{rate:.4f}"))

    return buffer.getvalue()
