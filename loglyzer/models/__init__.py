# Log models package
from .log_entry import LogEntry, LogLevel, TIMESTAMP_FORMAT
from .stats import ErrorFrequency, IngestionResult, LogStats

__all__ = [
    "LogEntry",
    "LogLevel",
    "TIMESTAMP_FORMAT",
    "ErrorFrequency",
    "IngestionResult",
    "LogStats",
]
