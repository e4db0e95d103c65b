"""
Entry filters.

Narrows a batch of parsed entries by level, time window and free-text
search. All constraints are combined with AND; a constraint that is not
set lets every entry through.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from ..models.log_entry import LogEntry, TIMESTAMP_FORMAT


@dataclass(frozen=True)
class FilterOptions:
    """
    Filter parameters.

    `search` is stored lowercased; since and until are inclusive bounds.
    """

    errors_only: bool = False
    search: Optional[str] = None
    since: Optional[datetime] = None
    until: Optional[datetime] = None

    def __post_init__(self):
        if self.search is not None:
            object.__setattr__(self, "search", self.search.lower())

    @property
    def is_empty(self) -> bool:
        """True when no constraint is set."""
        return (
            not self.errors_only
            and self.search is None
            and self.since is None
            and self.until is None
        )

    def matches(self, entry: LogEntry) -> bool:
        """Check one entry against every set constraint."""
        if self.errors_only and not entry.is_error():
            return False
        if self.since is not None and entry.datetime < self.since:
            return False
        if self.until is not None and entry.datetime > self.until:
            return False
        if self.search is not None and self.search not in entry.render().lower():
            return False
        return True


def parse_datetime(value: str) -> datetime:
    """
    Parse a "YYYY-MM-DD HH:MM:SS" filter bound.

    Raises:
        ValueError: value is not in that format
    """
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Canonical string form of a filter bound, None passes through."""
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)


def filter_entries(entries: Iterable[LogEntry], options: FilterOptions) -> list[LogEntry]:
    """
    Keep the entries matching options, in their original order.

    Args:
        entries: Parsed log entries
        options: Filter parameters

    Returns:
        New list with the matching entries
    """
    if options.is_empty:
        return list(entries)
    return [entry for entry in entries if options.matches(entry)]


def filter_logs_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Pipeline node applying the filters to the ingested entries.

    Expects state to contain:
        - ingestion: IngestionResult
        - filters: FilterOptions - Optional, no filtering when missing

    Updates state with:
        - filtered_entries: List[LogEntry]
        - no_matches: bool - True when nothing survived filtering
    """
    options = state.get("filters") or FilterOptions()
    filtered = filter_entries(state["ingestion"].entries, options)
    return {
        **state,
        "filtered_entries": filtered,
        "no_matches": not filtered,
    }
