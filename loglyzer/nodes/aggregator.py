"""
Statistics over a filtered batch of log entries.
"""

from collections import Counter
from datetime import datetime
from typing import Any, Optional, Sequence

from ..models.log_entry import LogEntry
from ..models.stats import ErrorFrequency, LogStats
from .filters import format_datetime


def rank_errors(error_messages: Counter, top_n: int) -> list[ErrorFrequency]:
    """
    The most frequent error messages, most frequent first.

    Messages with equal counts keep the order in which they were first
    seen. At least one message is returned when any exist, even for
    top_n below 1.
    """
    limit = max(top_n, 1)
    return [
        ErrorFrequency(message=message, count=count)
        for message, count in error_messages.most_common(limit)
    ]


def compute_error_rates(errors_by_hour: dict[str, int], total: int) -> dict[str, float]:
    """Errors per hour as a percentage of all `total` entries."""
    if total == 0:
        return {}
    return {hour: count / total * 100 for hour, count in errors_by_hour.items()}


def analyze_logs(
    entries: Sequence[LogEntry],
    top_n: int,
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    skipped: int = 0
) -> LogStats:
    """
    Compute summary statistics for a batch of entries.

    Args:
        entries: Filtered log entries
        top_n: Number of most frequent error messages to keep
        since: Lower time bound that was applied, echoed in the result
        until: Upper time bound that was applied, echoed in the result
        skipped: Unparsable line count from ingestion

    Returns:
        LogStats for the batch
    """
    by_level: Counter = Counter()
    error_messages: Counter = Counter()
    errors_by_hour: Counter = Counter()

    for entry in entries:
        by_level[entry.level.value] += 1

        if entry.is_error():
            error_messages[entry.message] += 1
            hour = entry.hour_bucket
            if hour is not None:
                errors_by_hour[hour] += 1

    hourly = dict(sorted(errors_by_hour.items()))

    return LogStats(
        total_entries=len(entries),
        by_level=dict(by_level),
        top_errors=rank_errors(error_messages, top_n),
        errors_by_hour=hourly,
        error_rate_by_hour=compute_error_rates(hourly, len(entries)),
        since=format_datetime(since),
        until=format_datetime(until),
        skipped_lines=skipped,
    )


def aggregate_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Pipeline node computing the statistics.

    Expects state to contain:
        - filtered_entries: List[LogEntry]
        - ingestion: IngestionResult
        - top_n: int
        - filters: FilterOptions - Optional

    Updates state with:
        - stats: LogStats
    """
    filters = state.get("filters")
    stats = analyze_logs(
        state["filtered_entries"],
        state.get("top_n", 5),
        since=filters.since if filters else None,
        until=filters.until if filters else None,
        skipped=state["ingestion"].skipped,
    )
    return {
        **state,
        "stats": stats,
    }
