"""
Result data models.

IngestionResult is what reading a log file produces; LogStats is the
summary the aggregator computes over the filtered entries and the
renderers consume.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from .log_entry import LogEntry


@dataclass
class IngestionResult:
    """
    Parsed entries of one log file plus the number of lines that failed to parse.
    """

    entries: List[LogEntry] = field(default_factory=list)

    # Lines that did not match the log grammar
    skipped: int = 0

    # Bookkeeping for verbose output
    total_lines: int = 0
    bytes_read: int = 0
    mode: str = "sequential"
    elapsed: float = 0.0  # Seconds spent reading and parsing

    @property
    def parsed(self) -> int:
        return len(self.entries)


@dataclass
class ErrorFrequency:
    """A distinct ERROR message and how often it occurred."""
    message: str
    count: int


@dataclass
class LogStats:
    """
    Aggregate statistics over a filtered batch of log entries.

    Hour keys are "HH:00" strings. error_rate_by_hour is the share, in
    percent, of all filtered entries that are errors logged in that hour.
    """

    total_entries: int
    by_level: dict[str, int] = field(default_factory=dict)
    top_errors: List[ErrorFrequency] = field(default_factory=list)
    errors_by_hour: dict[str, int] = field(default_factory=dict)
    error_rate_by_hour: dict[str, float] = field(default_factory=dict)

    # Echoed filter bounds, "YYYY-MM-DD HH:MM:SS"
    since: Optional[str] = None
    until: Optional[str] = None

    # Unparsable lines seen during ingestion, independent of filtering
    skipped_lines: int = 0

    @property
    def error_count(self) -> int:
        return self.by_level.get("ERROR", 0)

    def level_percentage(self, level: str) -> float:
        """Share of total_entries at the given level, in percent."""
        if self.total_entries == 0:
            return 0.0
        return self.by_level.get(level, 0) / self.total_entries * 100

    def to_dict(self) -> dict[str, Any]:
        """Plain structure for JSON serialization."""
        return asdict(self)
